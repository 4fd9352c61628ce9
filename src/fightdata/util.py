"""Common utilities and exception classes."""

from importlib.metadata import PackageNotFoundError, version


class FightdataError(Exception):
    """Base exception for fightdata."""


class FetchError(FightdataError):
    """Fetching or parsing the results page failed."""


class RequestConstructionError(FetchError):
    """The HTTP request could not be built."""


class NetworkError(FetchError):
    """Transport failure (DNS, connect, timeout)."""


class NotModifiedError(FetchError):
    """Server answered 304."""


class UnexpectedStatusError(FetchError):
    """Server answered with a non-2xx status other than 304."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        super().__init__(f"unexpected status code: {status_code} {reason}".rstrip())
        self.status_code = status_code


class DocumentParseError(FetchError):
    """HTML body could not be parsed."""


class ConversionError(FightdataError):
    """A single fight candidate could not be turned into a record."""


class CandidateConversionError(ConversionError):
    """Candidate is missing a required field."""


class PanicRecoveryError(ConversionError):
    """Unexpected exception raised while converting a candidate."""


class ConfigError(FightdataError):
    """Configuration could not be loaded or is invalid."""


def package_version() -> str:
    try:
        return version("fightdata")
    except PackageNotFoundError:
        return "0.0.0"
