""".. Ignore pydocstyle D400.

===========
FieldSelect
===========

Select fields of serialized representations with dotted paths.

.. automodule:: fieldselect.projection
   :members:

.. automodule:: fieldselect.plugin
   :members:

.. automodule:: fieldselect.rest

"""
from fieldselect.__about__ import (  # noqa: F401
    __author__,
    __copyright__,
    __email__,
    __license__,
    __summary__,
    __title__,
    __url__,
    __version__,
)
from fieldselect.exceptions import InvalidFieldSpec  # noqa: F401
from fieldselect.plugin import configure  # noqa: F401
from fieldselect.projection import pick, project  # noqa: F401
