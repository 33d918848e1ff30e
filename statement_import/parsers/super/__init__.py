from statement_import.parsers.super.australian_super import AustralianSuperParser
from statement_import.parsers.super.unisuper import UniSuperParser

__all__ = ["AustralianSuperParser", "UniSuperParser"]
