"""Secure logging configuration for pwappy-e2e.

Provides logging setup that masks the auth cookie values injected into
the browsing context, so CI logs never leak credentials.
"""

import logging
import re

_SECRET_COOKIES = r"pwappy_auth|pwappy_ident_key"


class CookieMaskingFilter(logging.Filter):
    """Logging filter that masks auth cookie values.

    Values of pwappy_auth and pwappy_ident_key are replaced with [MASKED].
    """

    COOKIE_PATTERNS = [
        # pwappy_auth=VALUE or pwappy_ident_key: VALUE
        re.compile(rf"({_SECRET_COOKIES})[=:]\s*([^\s;,}}\"']+)"),
        # Dict format {"pwappy_auth": "value"}
        re.compile(rf'(["\']?(?:{_SECRET_COOKIES})["\']?\s*[=:]\s*["\'])([^"\']+)(["\'])'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Mask cookie values in the record message and string args.

        Args:
            record: Log record to process

        Returns:
            Always True (the record is modified, never dropped)
        """
        if record.msg:
            record.msg = self.mask(str(record.msg))
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(self.mask(arg) if isinstance(arg, str) else arg for arg in record.args)
        return True

    def mask(self, text: str) -> str:
        """Mask all auth cookie values in text.

        Args:
            text: Text potentially containing cookie values

        Returns:
            Text with cookie values replaced by [MASKED]
        """
        result = text
        for pattern in self.COOKIE_PATTERNS:

            def mask_match(m: re.Match[str]) -> str:
                suffix = m.group(3) if len(m.groups()) > 2 else ""
                return m.group(1) + "[MASKED]" + suffix

            result = pattern.sub(mask_match, result)
        return result


def setup_logging(level: int = logging.INFO, name: str | None = None) -> logging.Logger:
    """Set up logging with cookie masking.

    Args:
        level: Logging level (default: INFO)
        name: Logger name (default: "pwappy_e2e")

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name or "pwappy_e2e")
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    handler.addFilter(CookieMaskingFilter())
    logger.addHandler(handler)

    return logger
