"""
Result values returned by the registration workflow.

A workflow call returns either ``Ok(payload)`` or ``Err(kind, message,
field_errors)``. Expected failures (bad input, duplicate email) and dependency
failures are all values, never exceptions, so routes only have to turn a
result into a response.
"""
from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = 'validation'    # user-correctable, per-field
    CONFLICT   = 'conflict'      # business rule, e.g. duplicate email
    DEPENDENCY = 'dependency'    # store / encoder failure, generic message only


@dataclass(frozen=True)
class Ok:
    payload: dict
    message: str = ''

    success = True

    def to_response(self):
        response = {'success': True, 'message': self.message}
        response.update(self.payload)
        return response


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    field_errors: dict = field(default_factory=dict)

    success = False

    def to_response(self):
        response = {'success': False, 'message': self.message}
        if self.field_errors:
            response['errors'] = self.field_errors
        return response
