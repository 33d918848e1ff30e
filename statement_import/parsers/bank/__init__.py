from statement_import.parsers.bank.anz import AnzParser
from statement_import.parsers.bank.bendigo import BendigoParser
from statement_import.parsers.bank.cba import CbaParser
from statement_import.parsers.bank.ing import IngParser
from statement_import.parsers.bank.macquarie import MacquarieParser
from statement_import.parsers.bank.nab import NabParser
from statement_import.parsers.bank.raiz import RaizParser
from statement_import.parsers.bank.swyftx import SwyftxParser
from statement_import.parsers.bank.up import UpParser
from statement_import.parsers.bank.westpac import WestpacParser

__all__ = [
    "AnzParser",
    "BendigoParser",
    "CbaParser",
    "IngParser",
    "MacquarieParser",
    "NabParser",
    "RaizParser",
    "SwyftxParser",
    "UpParser",
    "WestpacParser",
]
