"""Paginated collections of resources"""
import logging
import typing as t
from collections.abc import Mapping, Sequence
from itertools import chain

from toolz import get_in

from .coercions import Kind
from .resource import GenericResource, SystemProperties, _get, _to_wire
from .schema import Property

__all__ = [
    "Array",
    "TypeResolver",
    "Paginator",
    "paginate",
    "iter_items",
    "fetcher",
]

logger = logging.getLogger(__name__)


class TypeResolver(object):
    """Resolves item payloads to resource types by a discriminator.

    Parameters
    ----------
    types: ~typing.Mapping or ~typing.Callable or None
        discriminator value -> resource type.
        A callable may return ``None`` for unknown values.
    discriminator: ~typing.Sequence[str]
        the path to the discriminator inside an item payload
    default: type
        the type for unknown or missing discriminators
    """
    __slots__ = "types", "discriminator", "default"

    def __init__(self, types=None, discriminator=("sys", "type"),
                 default=GenericResource):
        self.types = {} if types is None else types
        self.discriminator = tuple(discriminator)
        self.default = default

    def resolve(self, value):
        """the resource type for a discriminator value"""
        if isinstance(self.types, Mapping):
            found = self.types.get(value)
        else:
            found = self.types(value)
        return self.default if found is None else found

    def __call__(self, item):
        return self.resolve(get_in(self.discriminator, item))

    def __repr__(self):
        return "<TypeResolver: {0.discriminator!r} -> {0.types!r}>".format(
            self
        )


def _as_resolver(resolver):
    if isinstance(resolver, TypeResolver):
        return resolver
    return TypeResolver(resolver)


class Array(SystemProperties, Sequence):
    """A page of resources, as returned by collection endpoints.
    Behaves as an ordinary (immutable) sequence of its items.

    Parameters
    ----------
    obj: ~typing.Mapping
        the raw payload: ``{sys, total, skip, limit, items}``
    client
        the shared transport capability, handed to every item
    resolver: TypeResolver or ~typing.Mapping or ~typing.Callable or None
        picks the type of each item by its discriminator,
        by default ``sys.type``. See :class:`TypeResolver`.
    nested_locale_fields: bool
        passed on to every item
    default_locale: str or None
        passed on to every item
    fetch: ~typing.Callable[[~typing.Mapping], Array] or None
        fetches a page for the given ``skip`` and ``limit`` parameters.
        Required for :meth:`next_page`.

    Note
    ----
    The number of items may be less than :attr:`total`.
    The other items are on other pages.
    """
    total = Property(Kind.INTEGER)
    skip = Property(Kind.INTEGER)
    limit = Property(Kind.INTEGER)

    def __init__(self, obj=None, client=None, resolver=None,
                 nested_locale_fields=False, default_locale=None,
                 fetch=None):
        self.resolver = _as_resolver(resolver)
        self.fetch = fetch
        super().__init__(obj, client, nested_locale_fields, default_locale)

    def _state(self, obj):
        state = super()._state(obj)
        state["items"] = tuple(map(self._load_item, _get(obj, "items") or ()))
        return state

    def _load_item(self, item):
        return self.resolver(item)(
            item,
            client=self.client,
            nested_locale_fields=self.nested_locale_fields,
            default_locale=self.default_locale,
        )

    @property
    def is_array(self):
        return True

    def __getitem__(self, index):
        return self.items[index]

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def each(self):
        """a fresh iterator over the items"""
        return iter(self.items)

    def map(self, func):
        """apply a function to each item, returning a list"""
        return [func(item) for item in self.items]

    def to_wire(self):
        payload = super().to_wire()
        payload["items"] = _to_wire(self.items)
        return payload

    @property
    def next_skip(self):
        """the ``skip`` of the next page, or ``None`` if this is the last"""
        if not self.items or self.skip + len(self.items) >= self.total:
            return None
        return self.skip + (self.limit or len(self.items))

    def next_page(self):
        """Fetch the next page.

        Returns
        -------
        Array or None
            the next page, or ``None`` if this is the last
        """
        if self.fetch is None:
            raise ValueError("array has no fetch callable for next pages")
        skip = self.next_skip
        if skip is None:
            return None
        return self.fetch({"skip": skip, "limit": self.limit})

    def __repr__(self):
        return ("<{0.__class__.__name__}: total={0.total}, skip={0.skip}, "
                "limit={0.limit}, items={0.items!r}>").format(self)


class Paginator(t.Iterator[Array]):
    """An iterator which keeps fetching the next page of a collection"""
    __slots__ = "_fetch", "_next_params"

    def __init__(self, fetch, params):
        self._fetch, self._next_params = fetch, params

    def __iter__(self):
        return self

    def __next__(self):
        """the next page"""
        if self._next_params is None:
            raise StopIteration()
        logger.debug("fetching page %r", self._next_params)
        page = self._fetch(self._next_params)
        skip = page.next_skip
        self._next_params = (None if skip is None
                             else dict(self._next_params, skip=skip))
        return page


def paginate(fetch, limit=None, skip=0):
    """Lazily iterate over the pages of a collection.
    Each page is fetched only when it is reached.

    Parameters
    ----------
    fetch: ~typing.Callable[[~typing.Mapping], Array]
        fetches a page for the given ``skip`` and ``limit`` parameters
    limit: int or None
        the page size. The server's default if ``None``.
    skip: int
        the number of items to skip before the first page

    Returns
    -------
    Paginator
        an iterator of :class:`Array` pages
    """
    params = {"skip": skip}
    if limit is not None:
        params["limit"] = limit
    return Paginator(fetch, params)


def iter_items(fetch, limit=None, skip=0):
    """Lazily iterate over the items on all pages of a collection.
    See :func:`paginate`."""
    return chain.from_iterable(paginate(fetch, limit=limit, skip=skip))


def fetcher(client, endpoint, resolver=None, params=None, **options):
    """Create a fetch callable for the pages of a collection endpoint.

    Parameters
    ----------
    client: ~resourceful.Client
        the transport capability
    endpoint: str
        the collection endpoint
    resolver
        the item type resolver, see :class:`Array`
    params: ~typing.Mapping or None
        extra query parameters for every page
    **options
        passed on to :class:`Array`

    Returns
    -------
    ~typing.Callable[[~typing.Mapping], Array]
        fetches the page for given ``skip`` and ``limit`` parameters
    """
    base = dict(params or {})

    def fetch(page_params):
        raw = client.request(endpoint, dict(base, **page_params))
        return Array(raw, client=client, resolver=resolver, fetch=fetch,
                     **options)

    return fetch
