"""Ambient request markers - parameter types that are never request DTOs."""


class ServerRequest:
    """
    Raw framework request passed to a handler next to its DTO.

    Handlers annotate a parameter with this type (or a subclass of it) so the
    analyzer can tell the request object apart from the payload.
    """

    method: str = "GET"
    path: str = "/"
