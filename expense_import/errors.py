class ExpenseImportError(Exception):
    """Base class for failures that stop a whole import."""


class SpreadsheetError(ExpenseImportError):
    """The uploaded file could not be read as a spreadsheet."""


class UnsupportedFileError(SpreadsheetError):
    pass


class EmptySpreadsheetError(ExpenseImportError):
    pass
