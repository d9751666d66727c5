class LunchWebError(Exception):
    """Base class for errors that fail a single request."""


class FetchError(LunchWebError):
    pass


class ParseError(LunchWebError):
    pass


class NotFoundError(LunchWebError):
    pass


class RenderError(LunchWebError):
    pass
