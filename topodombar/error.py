class NotSpecifiedError(Exception):
    """
    raised when information is required for a function but has not been given

    for example if the mapping of target terms to their associated genes was required
    but was not given then this error would be raised
    """

    pass


class DifferentChromosomeError(ValueError):
    """
    raised when a distance is requested between two elements on different chromosomes
    """

    pass


class InputFormatError(ValueError):
    """
    raised when a tab-delimited input file cannot be parsed into elements
    """

    def __init__(self, filename, msg, record=None):
        location = filename if record is None else f'{filename} (record {record})'
        ValueError.__init__(self, f'{location}: {msg}')
        self.filename = filename
        self.record = record
