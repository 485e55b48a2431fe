"""Support for selective field serialization.

Install the plugin on a serializer class to select fields of its
representation::

    @configure("username name.first")
    class UserSerializer(serializers.Serializer):
        ...

Fields are overridden by ``select`` in ``Meta`` of the serializer, which is
in turn overridden by ``select`` in the serializer context or by the
``select`` query parameter of the request in the context.
"""
import functools

from django.conf import settings

from fieldselect.plugin import SELECT_OPTION
from fieldselect.projection import project

QUERY_PARAM = "select"
FIELD_SEPARATOR = ","


def get_query_param():
    """Return the name of the query parameter with selected fields."""
    return getattr(settings, "FIELDSELECT_QUERY_PARAM", QUERY_PARAM)


def get_schema_options(field):
    """Return options declared in ``Meta`` of the serializer.

    ``Meta.select`` takes precedence over ``select`` given in
    ``Meta.representation_options``.
    """
    meta = getattr(field, "Meta", None)
    options = dict(getattr(meta, "representation_options", {}))
    select = getattr(meta, "select", None)
    if select is not None:
        options[SELECT_OPTION] = select
    return options


def get_root_options(field):
    """Return options given to the root serializer."""
    # Discover the root manually. We cannot use either `self.root` or `self.context`
    # due to a bug with incorrect caching (see DRF issue #5087).
    root = field
    while root.parent is not None:
        root = root.parent

    options = dict(getattr(root, "_context", {}))
    request = options.get("request")
    if request is None or SELECT_OPTION in options:
        return options

    query_params = getattr(request, "query_params", None)
    if query_params is None:
        query_params = request.GET
    if get_query_param() in query_params:
        options[SELECT_OPTION] = query_params[get_query_param()].replace(
            FIELD_SEPARATOR, " "
        )
    return options


def get_call_options(field):
    """Return options the field is serialized with.

    Options of the outermost selecting serializer come from the context,
    nested ones receive options forwarded by their selecting parent.
    """
    parent = field.parent
    while parent is not None and getattr(parent, "select_plugin", None) is None:
        parent = parent.parent

    if parent is None:
        return get_root_options(field)
    return resolve_selection(parent, log=False).forwarded()


def resolve_selection(field, plugin=None, log=True):
    """Resolve selection options of the field.

    Ancestors are resolved again for every nested field, so only the field
    itself is logged.
    """
    plugin = plugin or field.select_plugin
    return plugin.resolve(get_call_options(field), get_schema_options(field), log=log)


def install(plugin, serializer_class):
    """Wrap ``to_representation`` of the serializer class with the plugin."""
    to_representation = serializer_class.to_representation

    @functools.wraps(to_representation)
    def selective_to_representation(self, instance):
        effective = resolve_selection(self, plugin)
        value = to_representation(self, instance)
        return project(value, effective.fields)

    serializer_class.to_representation = selective_to_representation
    serializer_class.select_plugin = plugin
    return serializer_class
