class HGVSCantorException(Exception):
    """
    Base exception class for HGVSCantor.
    """

    pass


class ValidationException(HGVSCantorException):
    """
    Raised when model constructors are given invalid inputs, such as protein coordinates that are not 1-based.
    """

    pass


class InvalidCodonException(HGVSCantorException, ValueError):
    """
    Raised when a Codon is constructed from a string that is not three nucleotides.
    """

    pass


class UnknownStructuralVariantWarning(UserWarning):
    pass
