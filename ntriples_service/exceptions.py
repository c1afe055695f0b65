class SourceUnavailable(Exception):
    pass


class UnsupportedSource(Exception):
    pass
