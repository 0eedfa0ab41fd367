from enum import Enum


class LicenseShape(Enum):
    ABSENT = "absent"
    TEXT = "text"
    OBJECT = "object"
    LIST = "list"
    UNSUPPORTED = "unsupported"


class DependencyScope(Enum):
    DIRECT = "dependencies"
    DEV = "devDependencies"
