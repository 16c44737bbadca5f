from exportplist.src.constants.cli_constants import __version__

__all__ = ["__version__"]
