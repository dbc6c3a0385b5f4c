# src/reqlog/core/options.py
"""
Construction-time options for the request / error logging middleware.

Options are validated once, when the middleware is created, and frozen
afterwards. Any problem raises a `ConfigurationError` subclass right away so a
misconfigured application fails at startup instead of on its first request.
"""

from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..config.settings import get_settings
from ..exceptions import ConfigurationError, MissingOptionsError, MissingTransportsError
from ..validators.config_validators import has_items, to_lowercase
from ..transports.stdlib import LoggerTransport
from .request_filter import default_request_filter


class ErrorLoggerOptions(BaseModel):
    """Options for `error_logger()`."""

    # transport method the middleware calls for each event
    transport_method: ClassVar[str] = "log_exception"

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="ignore")

    transports: list[Any] = Field(min_length=1)
    request_filter: Callable[[Any, str], Any] = default_request_filter

    @field_validator("transports", mode="before")
    def copy_transports(cls, v: Any) -> Any:
        # snapshot the caller's list so appending to it later has no effect
        return list(v) if has_items(v) else v

    @field_validator("request_filter", mode="before")
    def default_filter(cls, v: Any) -> Any:
        return v or default_request_filter

    @model_validator(mode="after")
    def check_transport_method(self) -> "ErrorLoggerOptions":
        method = type(self).transport_method
        for i, transport in enumerate(self.transports):
            if not callable(getattr(transport, method, None)):
                raise ValueError(
                    f"transport #{i} ({type(transport).__name__}) has no callable '{method}'"
                )
        return self


class LoggerOptions(ErrorLoggerOptions):
    """Options for `logger()`."""

    transport_method: ClassVar[str] = "log"

    level: str = "info"

    @field_validator("level", mode="before")
    def normalize_level(cls, v: Any) -> str:
        if v is not None and not isinstance(v, str):
            raise ValueError("level must be a string")
        return to_lowercase(v) or "info"


def build_options(options: Mapping[str, Any] | ErrorLoggerOptions | None,
                  model: type[ErrorLoggerOptions]) -> ErrorLoggerOptions:
    """
    Validate raw middleware options into an instance of `model`.

    Raises:
        MissingOptionsError: `options` is None.
        MissingTransportsError: no transports, or an empty list.
        ConfigurationError: anything else pydantic rejects.
    """
    if options is None:
        raise MissingOptionsError()
    if type(options) is model:
        return options
    if isinstance(options, BaseModel):
        options = dict(options)
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            f"options must be a mapping or {model.__name__}, got {type(options).__name__}"
        )
    if not has_items(options.get("transports")):
        raise MissingTransportsError()

    try:
        return model.model_validate(dict(options))
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        raise ConfigurationError(
            f"invalid reqlog middleware options: {exc.errors()[0]['msg']}",
            fields=fields,
        ) from exc


def options_from_settings(settings: Any = None, **overrides: Any) -> dict[str, Any]:
    """
    Middleware options wired to the logging setup: one `LoggerTransport` on
    `settings.REQUEST_LOGGER_NAME` at `settings.REQUEST_LOG_LEVEL`.

        app.add_middleware(RequestLoggerMiddleware, **options_from_settings())
    """

    settings = settings or get_settings()
    options: dict[str, Any] = {
        "transports": [LoggerTransport(name=settings.REQUEST_LOGGER_NAME)],
        "level": settings.REQUEST_LOG_LEVEL,
    }
    options.update(overrides)
    return options


__all__ = ["LoggerOptions", "ErrorLoggerOptions", "build_options", "options_from_settings"]
