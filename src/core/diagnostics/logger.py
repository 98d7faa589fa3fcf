"""
Diagnostic Logger — приёмник пар (message, ResultCode)

Логгер передаётся явно в конструкторы Vector / Compact / PointSet
(dependency injection). Время жизни логгера определяет приложение:
глобального singleton и подсчёта клиентов нет.

Логирование best-effort: ошибки обработчиков поглощаются модулем logging
и никогда не меняют результат операции, вызвавшей запись.

Уровни:
- SUCCESS                      → DEBUG
- OUT_OF_BOUNDS, NOT_FOUND     → INFO (штатные исходы поиска/итерации)
- остальные коды               → ERROR
"""

import logging
from pathlib import Path
from typing import Final, Optional, Union

from src.core.result_codes import LogFileError, ResultCode

DEFAULT_LOGGER_NAME: Final[str] = "compact_geometry"

LOG_FORMAT: Final[str] = "%(asctime)s - %(levelname)s - %(message)s"

# Префиксы сообщений по коду результата
_PREFIXES: Final[dict[ResultCode, str]] = {
    ResultCode.SUCCESS: "INFO: ",
    ResultCode.OUT_OF_MEMORY: "ERROR (out of memory): ",
    ResultCode.BAD_REFERENCE: "ERROR (bad reference): ",
    ResultCode.WRONG_DIM: "ERROR (wrong dimension): ",
    ResultCode.DIVISION_BY_ZERO: "ERROR (division by zero): ",
    ResultCode.NAN_VALUE: "ERROR (not a number): ",
    ResultCode.FILE_ERROR: "ERROR (file error): ",
    ResultCode.OUT_OF_BOUNDS: "ERROR (out of bounds): ",
    ResultCode.NOT_FOUND: "ERROR (not found): ",
    ResultCode.WRONG_ARGUMENT: "ERROR (wrong argument): ",
    ResultCode.CALCULATION_ERROR: "ERROR (calculation error): ",
    ResultCode.MULTIPLE_DEFINITION: "ERROR (multiple definition): ",
}

_INFO_CODES: Final[frozenset[ResultCode]] = frozenset(
    {ResultCode.OUT_OF_BOUNDS, ResultCode.NOT_FOUND}
)


def level_for(code: ResultCode) -> int:
    """Уровень logging для кода результата."""
    if code == ResultCode.SUCCESS:
        return logging.DEBUG
    if code in _INFO_CODES:
        return logging.INFO
    return logging.ERROR


def format_message(message: str, code: ResultCode) -> str:
    """
    Форматирование сообщения с префиксом кода.

    Examples:
        >>> format_message("compact(is contains)", ResultCode.WRONG_DIM)
        'ERROR (wrong dimension): compact(is contains)'
    """
    return f"{_PREFIXES[ResultCode(code)]}{message}"


class DiagnosticLogger:
    """
    Диагностический логгер поверх стандартного logging.Logger.

    Args:
        name: Имя логгера в иерархии logging (default: "compact_geometry")
        logger: Готовый logging.Logger (имеет приоритет над name)

    Example:
        >>> diag = DiagnosticLogger()
        >>> diag.set_log_file("log.txt")
        >>> compact = create_compact(a, b, logger=diag)
        >>> diag.close()
    """

    def __init__(
        self,
        name: str = DEFAULT_LOGGER_NAME,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(name)
        self._file_handler: Optional[logging.FileHandler] = None

    @property
    def log_file(self) -> Optional[Path]:
        """Путь к текущему файлу лога (None если пишем только в logging)."""
        if self._file_handler is None:
            return None
        return Path(self._file_handler.baseFilename)

    def log(self, message: str, code: ResultCode) -> ResultCode:
        """
        Запись пары (message, code).

        Returns:
            Тот же code — позволяет писать `return self._log(msg, code)`
        """
        self.logger.log(level_for(code), format_message(message, code))
        return code

    def set_log_file(self, path: Union[str, Path]) -> None:
        """
        Перенаправление диагностики в файл (файл перезаписывается).

        Предыдущий файловый обработчик этого логгера закрывается.

        Raises:
            LogFileError: Если файл не удаётся открыть
        """
        try:
            handler = logging.FileHandler(path, mode="w", encoding="utf-8")
        except OSError as e:
            self.log(f"set log file {path}: {e}", ResultCode.FILE_ERROR)
            raise LogFileError(f"Couldn't open log file {path}: {e}") from e

        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

        self.close()
        self.logger.addHandler(handler)
        self._file_handler = handler
        if self.logger.level == logging.NOTSET or self.logger.level > logging.DEBUG:
            self.logger.setLevel(logging.DEBUG)

    def close(self) -> None:
        """Отключение и закрытие файлового обработчика (если есть)."""
        if self._file_handler is None:
            return
        self.logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None


def log_result(
    logger: Optional[DiagnosticLogger],
    message: str,
    code: ResultCode,
) -> ResultCode:
    """
    Запись в логгер, допускающий None (null logger отключает диагностику).

    Returns:
        code без изменений
    """
    if logger is not None:
        logger.log(message, code)
    return code
