class TypedashError(Exception):
    pass


class ConfigError(TypedashError):
    pass
