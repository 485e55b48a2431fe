""".. Ignore pydocstyle D400.

=====================
FieldSelect Utilities
=====================

"""


class BraceMessage:
    """Log message formatted with the {}-string syntax.

    Formatting is deferred until a handler actually emits the record, so
    debug messages about selected fields cost nothing when debug logging
    is disabled.

    Example of usage:

        .. code-block:: python

            from fieldselect.utils import BraceMessage as __

            logger.debug(__("Selecting {} of {name}", fields, name="user"))

    """

    def __init__(self, fmt, *args, **kwargs):
        """Initialize attributes."""
        self.fmt = fmt
        self.args = args
        self.kwargs = kwargs

    def __str__(self):
        """Format the message."""
        return self.fmt.format(*self.args, **self.kwargs)
