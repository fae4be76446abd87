from roster.core.errors import (
    ConflictError,
    NotFoundError,
    RosterError,
    UnauthorizedError,
    ValidationError,
    error_for_status,
)


def test_error_for_status_maps_known_codes():
    assert isinstance(error_for_status(400, "bad"), ValidationError)
    assert isinstance(error_for_status(401, "no"), UnauthorizedError)
    assert isinstance(error_for_status(404, "gone"), NotFoundError)
    assert isinstance(error_for_status(409, "dup"), ConflictError)


def test_error_for_status_falls_back_to_base_class():
    exc = error_for_status(503, "down")
    assert type(exc) is RosterError
    assert exc.status_code == 503
    assert exc.message == "down"
