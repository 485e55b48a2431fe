"""Support for selective field serialization."""
from rest_framework.fields import JSONField

from fieldselect.plugin import SelectPlugin
from fieldselect.projection import project

from .serializers import resolve_selection


class ProjectableJSONField(JSONField):
    """JSON field which supports projection.

    Fields given as ``select`` are selected from the value, unless an
    explicit selection of an enclosing serializer suppresses them.
    """

    def __init__(self, *args, select=None, **kwargs):
        """Initialize attributes."""
        self.select_plugin = SelectPlugin(select, default_field="")
        super().__init__(*args, **kwargs)

    def to_representation(self, value):
        """Project outgoing native value."""
        value = project(value, resolve_selection(self).fields)
        return super().to_representation(value)
