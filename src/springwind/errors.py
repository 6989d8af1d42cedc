class WindError(Exception):
    pass


class WindConfigError(WindError, ValueError):
    pass


class NoJointsError(WindError):
    pass


class MissingRuntimeError(WindError):
    pass
