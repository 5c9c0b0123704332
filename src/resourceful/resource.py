"""Resources: typed views over raw API payloads"""
from collections.abc import Mapping
from datetime import datetime

from toolz import keyfilter, valmap

from .coercions import PASS, coerce
from .config import DEFAULT_CONFIGURATION
from .schema import NAMESPACES, PROPERTY_TYPES, Property, Schema, SysProperty
from .utils import snakify

__all__ = [
    "bind",
    "Resource",
    "SystemProperties",
    "Fields",
    "Link",
    "GenericResource",
]


def _get(obj, key):
    return obj.get(key) if isinstance(obj, Mapping) else None


def _items(obj):
    return obj.items() if isinstance(obj, Mapping) else ()


def bind(obj, coercions, client=None, keys=None):
    """Bind a raw payload into a new mapping of typed values.

    Parameters
    ----------
    obj: ~typing.Mapping or ~typing.Sequence or None
        the raw payload. It is never mutated.
        A sequence payload is handed whole to every key.
    coercions: ~typing.Mapping[str, ~resourceful.coercions.Coercion]
        the schema. Keys without a coercion are passed through.
    client
        passed through unchanged to nested resources
    keys: ~typing.Iterable[str] or None
        the keys to bind. Defaults to the payload's own keys,
        or the schema's keys for a sequence payload.
        A scalar payload has no keys: every value is absent.

    Returns
    -------
    dict
        wire name -> typed value. Empty if ``obj`` is ``None``.

    Raises
    ------
    ~resourceful.errors.CoercionError
        if a date cannot be parsed
    """
    if obj is None:
        return {}
    positional = isinstance(obj, (list, tuple))
    if keys is None:
        if positional:
            keys = coercions
        else:
            keys = obj if isinstance(obj, Mapping) else ()
    return {
        key: coerce(
            coercions.get(key, PASS),
            list(obj) if positional else _get(obj, key),
            client,
        )
        for key in keys
    }


def _to_wire(value):
    if isinstance(value, Resource):
        return value.to_wire()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Mapping):
        return valmap(_to_wire, dict(value))
    if isinstance(value, (list, tuple)):
        return list(map(_to_wire, value))
    return value


class Resource(object):
    """Base class for resources.

    Properties are declared in the class body with
    :class:`~resourceful.schema.Property` descriptors, or at runtime
    with :meth:`declare`. Subclasses extend the schemas of their bases.

    Parameters
    ----------
    obj: ~typing.Mapping or None
        the raw payload to bind
    client
        the shared transport capability. Not owned by the resource.
    nested_locale_fields: bool
        whether fields in the payload are ``{field: {locale: value}}``
        rather than flattened to a single locale
    default_locale: str or None
        the locale of flattened fields. Defaults to the client's.
    """
    _schemas = {namespace: Schema() for namespace in NAMESPACES}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._schemas = {
            namespace: Schema([base._schemas[namespace]
                               for base in cls.__bases__
                               if issubclass(base, Resource)])
            for namespace in NAMESPACES
        }
        for obj in list(vars(cls).values()):
            if isinstance(obj, Property):
                cls._schemas[obj.namespace].declare(obj.name, obj.coercion)

    def __init__(self, obj=None, client=None, nested_locale_fields=False,
                 default_locale=None):
        self.client = client
        self.nested_locale_fields = bool(nested_locale_fields)
        self.default_locale = (
            default_locale
            or getattr(client, "default_locale", None)
            or DEFAULT_CONFIGURATION.default_locale
        )
        vars(self).update(self._state(obj))

    @classmethod
    def schema(cls, namespace="properties"):
        """the effective schema of the given namespace"""
        return cls._schemas[namespace].effective()

    @classmethod
    def declare(cls, name, coercion=None, namespace="properties"):
        """Declare a property at runtime.

        Parameters
        ----------
        name: str
            the wire name. The accessor is its snake_cased form.
        coercion
            anything accepted by :func:`~resourceful.coercions.as_coercion`
        namespace: str
            one of ``properties``, ``sys``, ``fields``

        Returns
        -------
        ~resourceful.schema.Property
            the installed accessor
        """
        prop = PROPERTY_TYPES[namespace](coercion, name=name)
        attr = snakify(name)
        prop.__set_name__(cls, attr)
        setattr(cls, attr, prop)
        cls._schemas[namespace].declare(name, prop.coercion)
        return prop

    def _state(self, obj):
        """bind a raw payload into a new instance state.
        Leaves the instance itself untouched."""
        return {"raw_object": obj, "properties": self._bind_properties(obj)}

    def _bind_properties(self, obj):
        schema = self.schema()
        return bind(obj, schema, self.client, keys=list(schema))

    def _namespace(self, namespace, create=False):
        if namespace == "properties":
            return self.properties
        raise AttributeError("{} has no {!r} namespace".format(
            self.__class__.__name__, namespace))

    @property
    def sys(self):
        """system properties. ``None`` for resources without them"""
        return None

    def fields(self, locale=None):
        """content fields. ``None`` for resources without them"""
        return None

    @property
    def is_array(self):
        return False

    def to_wire(self):
        """the bound state as a JSON-compatible payload"""
        return _to_wire(self.properties)

    def __repr__(self):
        return "<{0.__class__.__name__}: properties={0.properties!r}>".format(
            self
        )


class SystemProperties(Resource):
    """resources with system (meta) properties under ``sys``"""
    id = SysProperty(str)
    type = SysProperty(str)
    version = SysProperty(int)
    revision = SysProperty(int)
    published_version = SysProperty(int)
    published_counter = SysProperty(int)
    archived_version = SysProperty(int)
    created_at = SysProperty(datetime)
    updated_at = SysProperty(datetime)
    published_at = SysProperty(datetime)
    first_published_at = SysProperty(datetime)
    archived_at = SysProperty(datetime)
    sys_locale = SysProperty(str, name="locale")

    def _state(self, obj):
        state = super()._state(obj)
        state["_sys"] = bind(_get(obj, "sys"), self.schema("sys"),
                             self.client)
        return state

    def _namespace(self, namespace, create=False):
        if namespace == "sys":
            return self._sys
        return super()._namespace(namespace, create)

    @property
    def sys(self):
        return self._sys

    def to_wire(self):
        payload = super().to_wire()
        payload["sys"] = _to_wire(self._sys)
        return payload


class Fields(Resource):
    """Resources with localized content fields.

    When ``nested_locale_fields`` is false the payload's fields are
    flattened to one locale: ``sys.locale`` or the default locale.
    Otherwise they are ``{field: {locale: value}}`` and every
    locale is kept.
    """

    def _state(self, obj):
        state = super()._state(obj)
        locale = _get(_get(obj, "sys"), "locale") or self.default_locale
        raw = _get(obj, "fields")
        schema = self.schema("fields")
        if self.nested_locale_fields:
            fields = {}
            for name, localized in _items(raw):
                if not isinstance(localized, Mapping):
                    localized = {locale: localized}
                for code, value in localized.items():
                    fields.setdefault(code, {})[name] = coerce(
                        schema.get(name, PASS), value, self.client)
        else:
            fields = {locale: bind(raw, schema, self.client)}
        state.update(_fields=fields, _locale=locale)
        return state

    def _namespace(self, namespace, create=False):
        if namespace == "fields":
            if create:
                return self._fields.setdefault(self._locale, {})
            return self._fields.get(self._locale, {})
        return super()._namespace(namespace, create)

    @property
    def locale(self):
        """the locale field accessors read and write"""
        return self._locale

    @locale.setter
    def locale(self, value):
        self._locale = value

    def fields(self, locale=None):
        """the fields in the given locale, or the current one"""
        return self._fields.get(locale or self._locale, {})

    def fields_with_locales(self):
        """all fields as ``{field: {locale: value}}``"""
        result = {}
        for code, values in self._fields.items():
            for name, value in values.items():
                result.setdefault(name, {})[code] = value
        return result

    def to_wire(self):
        payload = super().to_wire()
        payload["fields"] = _to_wire(
            self.fields_with_locales()
            if self.nested_locale_fields
            else self.fields()
        )
        return payload


class Link(SystemProperties):
    """a reference to another resource, by type and id"""
    link_type = SysProperty(str)


for _name in ("space", "environment", "contentType",
              "createdBy", "updatedBy", "publishedBy"):
    SystemProperties.declare(_name, Link, namespace="sys")
del _name


class GenericResource(SystemProperties, Fields):
    """The fallback for payloads of unknown type.
    Binds every top-level key as an untyped property."""

    def _bind_properties(self, obj):
        if isinstance(obj, Mapping):
            obj = keyfilter(lambda key: key not in ("sys", "fields"), obj)
        return bind(obj, self.schema(), self.client)
