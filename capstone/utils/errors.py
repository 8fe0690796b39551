from typing import Dict


class ServiceError(Exception):
    """Base class for failures reported by the service layer.

    Services raise these internally and convert them to a failure result at
    their boundary with ``to_result``; routes map ``kind`` to a status code.
    """

    kind = 'internal'
    status_code = 500

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_result(self) -> Dict:
        result = {'success': False, 'message': self.message, 'error_type': self.kind}
        result.update(self.details)
        return result


class ValidationError(ServiceError):
    """Malformed or missing input"""
    kind = 'validation'
    status_code = 400


class NotFoundError(ServiceError):
    """Referenced entity does not exist"""
    kind = 'not_found'
    status_code = 404


class ConflictError(ServiceError):
    """State precondition violated"""
    kind = 'conflict'
    status_code = 409


class ConfigurationError(ServiceError):
    """Required global configuration is missing"""
    kind = 'configuration'
    status_code = 500


class InternalError(ServiceError):
    kind = 'internal'
    status_code = 500


STATUS_CODES = {
    cls.kind: cls.status_code
    for cls in (ValidationError, NotFoundError, ConflictError, ConfigurationError, InternalError)
}


def status_code_for(result: Dict) -> int:
    """HTTP status for a failure result produced by ServiceError.to_result"""
    return STATUS_CODES.get(result.get('error_type'), 400)
