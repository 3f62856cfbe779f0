import functools
import time

import structlog

logger = structlog.get_logger('core')


def model_context(instance):
    """Контекст модели для логов"""
    if instance is None:
        return {'model': None, 'pk': None}
    return {
        'model': instance._meta.label,
        'pk': instance.pk,
    }


def log_operation(operation: str):
    """
    Декоратор для логирования сервисных операций.

    Пишет operation_started / operation_completed с длительностью,
    а при исключении operation_failed и пробрасывает его дальше.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            started = time.monotonic()
            logger.debug("operation_started", operation=operation)
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.warning(
                    "operation_failed",
                    operation=operation,
                    error=str(exc),
                    error_type=type(exc).__name__,
                    duration_ms=round((time.monotonic() - started) * 1000, 2),
                )
                raise
            logger.info(
                "operation_completed",
                operation=operation,
                duration_ms=round((time.monotonic() - started) * 1000, 2),
            )
            return result
        return wrapper
    return decorator
