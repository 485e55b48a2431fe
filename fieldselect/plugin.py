""".. Ignore pydocstyle D400.

======================
Field Selection Plugin
======================

The plugin wraps an existing serialization function and applies field
projection to the representation it produces. Fields to select are resolved
on every call, the first match wins:

1. ``select`` given in the call options. Nested entities serialized
   during the call skip their own selection. An empty ``select`` disables
   selection of the entity itself, but lets nested entities use their
   defaults.
2. ``select`` given in the schema options.
3. Fields given to :func:`configure`.

"""
import functools
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from django.conf import settings

from .projection import apply_default_field, normalize_fields, project
from .utils import BraceMessage as __

logger = logging.getLogger(__name__)

SELECT_OPTION = "select"

DEFAULT_FIELD = "id"


class _Suppressed:
    """Marker for nested entities serialized under an explicit selection."""

    def __bool__(self):
        """Evaluate as no fields."""
        return False

    def __repr__(self):
        """Return the marker name."""
        return "SUPPRESSED"


SUPPRESSED = _Suppressed()


def get_default_field():
    """Return the field which is always kept when fields are included."""
    if not settings.configured:
        return DEFAULT_FIELD
    return getattr(settings, "FIELDSELECT_DEFAULT_FIELD", DEFAULT_FIELD)


@dataclass(frozen=True)
class EffectiveOptions:
    """Options resolved for a single serialization call.

    ``transform_options`` are passed to the wrapped serializer, ``fields``
    are the normalized fields or ``None`` if nothing is selected and
    ``propagate`` tells whether nested entities may apply their own
    default fields.
    """

    transform_options: Dict[str, Any]
    fields: Optional[Dict[str, Any]]
    propagate: bool

    def forwarded(self) -> Dict[str, Any]:
        """Return options for nested serializations."""
        options = dict(self.transform_options)
        if not self.propagate:
            options[SELECT_OPTION] = SUPPRESSED
        return options


def resolve_options(
    options,
    schema_options=None,
    default_fields=None,
    default_field=None,
    log=True,
):
    """Resolve fields and options of a single serialization call.

    :param options: call options or ``None`` if not given
    :param schema_options: options declared by the schema
    :param default_fields: fields configured for the plugin
    :param default_field: field kept whenever fields are included
    :param log: whether to log the resolved fields
    :rtype: EffectiveOptions
    :raises InvalidFieldSpec: if the resolved fields are invalid
    """
    schema_options = schema_options or {}
    transform_options = dict(schema_options if options is None else options)
    propagate = True

    if options is not None and SELECT_OPTION in options:
        fields = options[SELECT_OPTION]
        if fields is SUPPRESSED or fields:
            # Explicit selection applies to this entity only.
            propagate = False
    else:
        fields = schema_options.get(SELECT_OPTION) or default_fields

    transform_options.pop(SELECT_OPTION, None)
    fields = apply_default_field(normalize_fields(fields), default_field)

    if log:
        logger.debug(
            __(
                "Resolved select fields {} (nested selection {}).",
                fields,
                "enabled" if propagate else "suppressed",
            )
        )
    return EffectiveOptions(transform_options, fields, propagate)


class SelectPlugin:
    """Field selection for a serializer.

    The plugin can wrap a plain serialization function with :meth:`wrap` or
    be used as a class decorator on a Django REST framework serializer.
    """

    def __init__(self, fields=None, default_field=None):
        """Initialize attributes.

        :param fields: default fields, validated immediately
        :param default_field: field kept whenever fields are included,
            ``FIELDSELECT_DEFAULT_FIELD`` setting is used if not given and
            an empty string disables it
        """
        normalize_fields(fields)
        self.fields = fields
        self._default_field = default_field

    @property
    def default_field(self):
        """Return the field kept whenever fields are included."""
        if self._default_field is None:
            return get_default_field()
        return self._default_field

    def resolve(self, options=None, schema_options=None, log=True):
        """Resolve options of a single serialization call."""
        return resolve_options(
            options,
            schema_options=schema_options,
            default_fields=self.fields,
            default_field=self.default_field,
            log=log,
        )

    def wrap(self, serialize, schema_options=None):
        """Wrap ``serialize(entity, options)`` to select fields of its result.

        The wrapped function receives options without the select option,
        except when nested entities have to skip their selection.
        """

        @functools.wraps(serialize)
        def wrapper(entity, options=None):
            effective = self.resolve(options, schema_options)
            value = serialize(entity, effective.forwarded())
            return project(value, effective.fields)

        return wrapper

    def __call__(self, serializer_class):
        """Install field selection on a serializer class."""
        from .rest.serializers import install

        return install(self, serializer_class)


def configure(fields=None, default_field=None):
    """Return field selection plugin with the given default fields."""
    return SelectPlugin(fields, default_field=default_field)
