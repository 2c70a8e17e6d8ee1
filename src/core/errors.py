"""Search failures surfaced to the UI."""


class SearchError(Exception):
    pass


class NetworkError(SearchError):
    pass


class DecodeError(SearchError):
    pass
