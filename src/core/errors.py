import enum
from dataclasses import dataclass


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    VALIDATION = "validation"


HTTP_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.VALIDATION: 422,
}


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]


def not_found(message: str) -> ServiceError:
    return ServiceError(ErrorKind.NOT_FOUND, message)


def conflict(message: str) -> ServiceError:
    return ServiceError(ErrorKind.CONFLICT, message)


def forbidden(message: str) -> ServiceError:
    return ServiceError(ErrorKind.FORBIDDEN, message)


def invalid(message: str) -> ServiceError:
    return ServiceError(ErrorKind.VALIDATION, message)
