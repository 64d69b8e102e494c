"""
Global process setup for this package.
"""
import requestgate.logging


if not __debug__:
    raise Exception("Asserts are used for validation and integrity.  Please turn off optimization!")


requestgate.logging.configure()
