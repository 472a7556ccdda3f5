from fastapi import HTTPException, status


class AidFlowError(HTTPException):
    """Base of every error a service reports to its caller. No state is mutated when raised."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)


class ValidationError(AidFlowError):
    """Preconditions unmet: bad quantity, unresolved ids, empty target, ineligible courier."""
    status_code = 422


class StateConflictError(AidFlowError):
    """Transition requested from a state that does not allow it."""
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(AidFlowError):
    status_code = status.HTTP_404_NOT_FOUND


def not_found_exception(resource: str = "Resource") -> NotFoundError:
    return NotFoundError(f"{resource} not found")


def conflict_exception(detail: str) -> StateConflictError:
    return StateConflictError(detail)


def validation_exception(detail: str) -> ValidationError:
    return ValidationError(detail)
