"""
Constants and common utilities for the lfqprep package.

This module defines default column names, separators and file helpers used
throughout the package for long-format table preprocessing.
"""

# Column name constants (generic long format)
PROTEIN_NAME = "ProteinName"
PROTEIN_DESCRIPTION = "ProteinDescription"
PROTEIN_ACCESSION = "ProteinAccession"
PEPTIDE_SEQUENCE = "PeptideSequence"
RUN = "Run"
QUANT_VALUE = "quant_value"
IS_DECOY = "IsDecoy"

# Skyline export column names
SKYLINE_REPLICATE = "ReplicateName"

# Spectronaut export column names
SPECTRONAUT_PROTEIN = "EG.ProteinId"
SPECTRONAUT_RUN = "R.FileName"
SPECTRONAUT_SEQUENCE = "EG.StrippedSequence"
SPECTRONAUT_DECOY = "EG.IsDecoy"
SPECTRONAUT_SPECIES = "species"

# Separators
PROTEIN_GROUP_SPLIT = "/"
# ASCII unit separator, used to build composite aggregation keys
KEY_SEPARATOR = "\x1f"

DEFAULT_FILTER_SYMBOL = "True"
DEFAULT_MIN_IDENTIFIED = 2

# Key under which the experiment annotation is attached to DataFrame.attrs
EXP_ANNOTATION_ATTR = "exp_annotation"

SKYLINE_USEFUL_PROPERTIES = [
    PROTEIN_NAME,
    PROTEIN_DESCRIPTION,
    PROTEIN_ACCESSION,
    PEPTIDE_SEQUENCE,
]

TABLE_SUFFIXES = {
    ".csv": ",",
    ".tsv": "\t",
    ".txt": "\t",
    ".tab": "\t",
}
EXCEL_SUFFIXES = (".xlsx", ".xls")


def is_parquet(path: str) -> bool:
    """
    Check if a file is in Parquet format.

    This function attempts to open the specified file and read its header
    to determine if it matches the Parquet file signature.

    Parameters
    ----------
    path : str
        The file path to check.

    Returns
    -------
    bool
        True if the file is a Parquet file, False otherwise.
    """
    try:
        with open(path, "rb") as fh:
            header = fh.read(4)
        return header == b"PAR1"
    except IOError:
        return False
