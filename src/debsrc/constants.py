from os import getenv

# log level for the RichHandler set up in debsrc/__init__.py
LOG_LEVEL = getenv("DEBSRC_LOG_LEVEL", "INFO").upper()

# default target architecture for build ordering when none is given on the command line
DEFAULT_ARCH = getenv("DEBSRC_ARCH", "amd64")

# characters stripped from each item of a multi-valued control field
FIELD_STRIP_CHARS = "\n\r\t "
