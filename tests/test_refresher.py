import copy

import pytest

import resourceful as rf


class Locale(rf.Refresher, rf.SystemProperties):
    name = rf.Property(str)
    code = rf.Property(str)

    def identity(self):
        return self.space.id, self.id


class Entry(rf.Refresher, rf.SystemProperties, rf.Fields):

    def identity(self):
        return self.id


class TestReload:

    def test_replaces_in_place(self, make_locale, mocker):
        locale = Locale(make_locale())
        fresh = make_locale(name="Polish PL", version=2)
        refetch = mocker.Mock(return_value=fresh)

        result = rf.reload(locale, refetch)

        assert result is locale
        refetch.assert_called_once_with(("n6spjc167pc2",
                                         "0X5xcjckv6RMrd9Trae81p"))
        assert locale.name == "Polish PL"
        assert locale.version == 2
        assert locale.raw_object is fresh
        assert locale.properties == Locale(fresh).properties
        assert locale.sys == Locale(fresh).sys

    def test_discards_local_edits(self, make_locale):
        locale = Locale(make_locale())
        locale.version = 99
        locale.name = "edited"
        locale.reload(lambda identity: make_locale())
        assert locale.version == 1
        assert locale.name == "Polish"

    def test_failing_refetch_leaves_state(self, make_locale):
        locale = Locale(make_locale())
        locale.name = "edited"
        before = copy.deepcopy(locale.properties)
        raw_before = locale.raw_object

        def refetch(identity):
            raise rf.NotFound("gone")

        with pytest.raises(rf.NotFound):
            locale.reload(refetch)

        assert locale.properties == before
        assert locale.raw_object is raw_before

    def test_malformed_payload_leaves_state(self, make_locale):
        locale = Locale(make_locale())
        sys_before = dict(locale.sys)
        bad = make_locale(name="broken")
        bad["sys"]["createdAt"] = "not-a-date"

        with pytest.raises(rf.CoercionError):
            locale.reload(lambda identity: bad)

        assert locale.name == "Polish"
        assert locale.sys == sys_before

    def test_fields_replaced(self):
        entry = Entry({"sys": {"id": "e1"}, "fields": {"title": "old"}})
        entry.reload(lambda identity: {"sys": {"id": identity},
                                       "fields": {"title": "new"}})
        assert entry.fields() == {"title": "new"}

    def test_default_refetch(self, make_locale, mocker):
        locale = Locale(make_locale())
        refetch = mocker.patch.object(Locale, "refetch",
                                      return_value=make_locale(code="pl-PL"))
        assert locale.reload() is locale
        refetch.assert_called_once_with(("n6spjc167pc2",
                                         "0X5xcjckv6RMrd9Trae81p"))
        assert locale.code == "pl-PL"

    def test_not_implemented(self):

        class Unknown(rf.Refresher, rf.SystemProperties):
            pass

        with pytest.raises(NotImplementedError):
            Unknown().reload(lambda identity: {})
