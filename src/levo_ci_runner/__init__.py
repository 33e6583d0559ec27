"""Windows-friendly CI wrapper around the Levo security-testing CLI."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
