import enum


class RunStatus(enum.Enum):
    IN_PROGRESS = 'in_progress'
    READY_TO_COMPARE = 'ready_to_compare'
