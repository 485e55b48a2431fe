""".. Ignore pydocstyle D400.

====================
FieldSelect REST API
====================

Field selection for Django REST framework serializers.

.. automodule:: fieldselect.rest.serializers
   :members:

.. automodule:: fieldselect.rest.fields
   :members:

"""
