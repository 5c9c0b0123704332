"""resource definitions and their lookups"""
from functools import partial

import resourceful as rf

__all__ = [
    "Space",
    "Locale",
    "Entry",
    "Asset",
    "RESOURCE_TYPES",
    "locales",
    "find_locale",
    "all_spaces",
]

FieldProperty, Property = rf.FieldProperty, rf.Property


class Space(rf.Refresher, rf.SystemProperties):
    """a space: the container of all content"""
    name = Property(str)

    def identity(self):
        return self.id

    def refetch(self, space_id):
        return self.client.request("spaces/{}".format(space_id))


class Locale(rf.Refresher, rf.SystemProperties):
    """a locale available in a space"""
    name = Property(str)
    code = Property(str)
    contentful_code = Property(str)
    default = Property(bool)
    optional = Property(bool)
    fallback_code = Property(str)

    def identity(self):
        return self.space.id, self.id

    def refetch(self, identity):
        return self.client.request("spaces/{}/locales/{}".format(*identity))


class Entry(rf.Refresher, rf.SystemProperties, rf.Fields):
    """a content entry, with fields in one or more locales"""

    def identity(self):
        return self.space.id, self.id

    def refetch(self, identity):
        return self.client.request("spaces/{}/entries/{}".format(*identity))


class File(rf.Resource):
    """the file of an asset"""
    file_name = Property(str)
    content_type = Property(str)
    url = Property(str)
    details = Property()


class Asset(rf.Refresher, rf.SystemProperties, rf.Fields):
    """a media asset"""
    title = FieldProperty(str)
    description = FieldProperty(str)
    file = FieldProperty(File)

    def identity(self):
        return self.space.id, self.id

    def refetch(self, identity):
        return self.client.request("spaces/{}/assets/{}".format(*identity))


RESOURCE_TYPES = {
    "Space": Space,
    "Locale": Locale,
    "Entry": Entry,
    "Asset": Asset,
}


def locales(client, space_id, **params):
    """a fetch callable for the pages of a space's locales"""
    return rf.fetcher(client, "spaces/{}/locales".format(space_id),
                      resolver=RESOURCE_TYPES, params=params)


def find_locale(client, space_id, locale_id):
    """look up one locale by its id"""
    raw = client.request("spaces/{}/locales/{}".format(space_id, locale_id))
    return Locale(raw, client=client)


all_spaces = partial(rf.fetcher, endpoint="spaces", resolver=RESOURCE_TYPES)
all_spaces.__doc__ = "a fetch callable for the pages of all spaces"
