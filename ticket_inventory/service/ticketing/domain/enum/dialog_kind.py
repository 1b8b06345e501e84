from enum import StrEnum


class DialogKind(StrEnum):
    NONE = 'none'
    ADD = 'add'
    EDIT = 'edit'
    DELETE = 'delete'
    CAPACITY = 'capacity'


class CalendarKind(StrEnum):
    NONE = 'none'
    START = 'start'
    END = 'end'
    CAPACITY = 'capacity'
