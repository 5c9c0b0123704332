"""Declaration of resource properties, and the schemas they form"""
import threading
from types import MappingProxyType

from .coercions import as_coercion
from .utils import camelize

__all__ = [
    "Schema",
    "Property",
    "SysProperty",
    "FieldProperty",
    "NAMESPACES",
]

NAMESPACES = ("properties", "sys", "fields")

# guards declarations and cache population of all schemas
_LOCK = threading.RLock()


class Schema(object):
    """A table of coercions, keyed by wire name.
    Extends zero or more base schemas explicitly.

    Parameters
    ----------
    bases: ~typing.Sequence[Schema]
        the schemas to extend. Earlier bases take precedence.
    """
    __slots__ = "_own", "_bases", "_revision", "_cache"

    def __init__(self, bases=()):
        self._own = {}
        self._bases = tuple(bases)
        self._revision = 0
        self._cache = None

    @property
    def bases(self):
        return self._bases

    def declare(self, name, coercion=None):
        """Register a coercion under the wire name.
        Only this schema's own table is changed.

        Parameters
        ----------
        name: str
            the wire name
        coercion
            anything accepted by :func:`~resourceful.coercions.as_coercion`
        """
        coercion = as_coercion(coercion)
        with _LOCK:
            self._own[name] = coercion
            self._revision += 1

    def own(self):
        """the declarations made on this schema only"""
        return MappingProxyType(self._own)

    def _stamp(self):
        return (self._revision, tuple(b._stamp() for b in self._bases))

    def effective(self):
        """The merged, read-only table of this schema and its bases.

        Computed on first use, and again whenever this schema
        or one of its bases received a declaration since.
        """
        with _LOCK:
            stamp = self._stamp()
            if self._cache is None or self._cache[0] != stamp:
                merged = {}
                for base in reversed(self._bases):
                    merged.update(base.effective())
                merged.update(self._own)
                self._cache = (stamp, MappingProxyType(merged))
            return self._cache[1]

    def __contains__(self, name):
        return name in self.effective()

    def __repr__(self):
        return "<Schema: {!r}>".format(dict(self.effective()))


class Property(object):
    """A declared property of a resource.
    Implements python's descriptor protocol:
    on a class it returns itself, on an instance the bound value.

    Parameters
    ----------
    coercion
        anything accepted by :func:`~resourceful.coercions.as_coercion`
    name: str or None
        the wire name. By default, the camelCased attribute name.

    Example
    -------

    >>> class Locale(Resource):
    ...     name = Property(str)
    ...     default = Property(bool)
    ...     contentful_code = Property(str, name='contentfulCode')
    """
    namespace = "properties"

    def __init__(self, coercion=None, name=None):
        self.coercion = as_coercion(coercion)
        self.name = name
        self.owner = self.attr = None

    def __set_name__(self, owner, attr):
        self.owner, self.attr = owner, attr
        if self.name is None:
            self.name = camelize(attr)

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return instance._namespace(self.namespace).get(self.name)

    def __set__(self, instance, value):
        instance._namespace(self.namespace, create=True)[self.name] = value

    def __repr__(self):
        if self.owner is None:
            return "<{0.__class__.__name__} [unbound]>".format(self)
        return "<{0.__class__.__name__} {0.name!r} of {0.owner.__name__}>".format(
            self
        )


class SysProperty(Property):
    """a declared system (meta) property"""
    namespace = "sys"


class FieldProperty(Property):
    """a declared content field, read in the resource's current locale"""
    namespace = "fields"


PROPERTY_TYPES = {cls.namespace: cls
                  for cls in (Property, SysProperty, FieldProperty)}
