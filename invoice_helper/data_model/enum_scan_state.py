from enum import Enum


class ScanState(Enum):
    """
    States of the line scan that locates an identifier's amount.
    """
    SEARCHING = "SEARCHING"
    IN_SECTION = "IN_SECTION"
