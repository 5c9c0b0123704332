"""Reloading resources in place"""
import logging

__all__ = ["reload", "Refresher"]

logger = logging.getLogger(__name__)


def reload(resource, refetch):
    """Replace the state of a resource with a freshly fetched payload.

    The new payload is fully bound before anything is replaced:
    if fetching or binding fails, the resource is left unchanged.

    Parameters
    ----------
    resource: ~resourceful.Resource
        the resource to reload. Must implement ``identity()``.
    refetch: ~typing.Callable[[~typing.Any], ~typing.Mapping]
        fetches the raw payload for an identity

    Returns
    -------
    ~resourceful.Resource
        the same resource instance

    Raises
    ------
    ~resourceful.errors.TransportError
        as raised by ``refetch``
    ~resourceful.errors.CoercionError
        if the new payload has a malformed date
    """
    identity = resource.identity()
    logger.debug("reloading %s %r", type(resource).__name__, identity)
    state = resource._state(refetch(identity))
    vars(resource).update(state)
    return resource


class Refresher(object):
    """Mixin for resources which can be fetched again by their identity.
    Concrete resources implement :meth:`identity` and :meth:`refetch`.

    Example
    -------

    >>> class Locale(Refresher, SystemProperties):
    ...     name = Property(str)
    ...
    ...     def identity(self):
    ...         return self.space.id, self.id
    ...
    ...     def refetch(self, identity):
    ...         space_id, locale_id = identity
    ...         return self.client.request(
    ...             'spaces/{}/locales/{}'.format(space_id, locale_id))
    """
    __slots__ = ()

    def identity(self):
        """what identifies this resource to :meth:`refetch`"""
        raise NotImplementedError()

    def refetch(self, identity):
        """fetch the raw payload of the resource with the given identity"""
        raise NotImplementedError()

    def reload(self, refetch=None):
        """Reload in place, see :func:`reload`.

        Parameters
        ----------
        refetch: ~typing.Callable or None
            overrides :meth:`refetch` for this call
        """
        return reload(self, refetch or self.refetch)
