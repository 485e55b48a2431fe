# pylint: disable=missing-docstring
from types import SimpleNamespace

from testfixtures import LogCapture

from django.test import RequestFactory, SimpleTestCase, override_settings

from rest_framework import serializers
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from fieldselect import configure
from fieldselect.exceptions import InvalidFieldSpec
from fieldselect.rest.fields import ProjectableJSONField

factory = APIRequestFactory()


class NameSerializer(serializers.Serializer):
    first = serializers.CharField()
    last = serializers.CharField()


class BaseUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    password = serializers.CharField()
    name = NameSerializer()
    emails = serializers.ListField(child=serializers.CharField())


@configure("username")
class UserSerializer(BaseUserSerializer):
    pass


@configure("username")
class MetaUserSerializer(BaseUserSerializer):
    class Meta:
        select = "name.first"


@configure()
class OptionsUserSerializer(BaseUserSerializer):
    class Meta:
        representation_options = {"select": "username"}


@configure()
class OverriddenOptionsUserSerializer(BaseUserSerializer):
    class Meta:
        select = "emails"
        representation_options = {"select": "username"}


@configure("-password")
class UnrestrictedUserSerializer(BaseUserSerializer):
    pass


class GroupSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    users = UserSerializer(many=True)


@configure("name users.username")
class SelectiveGroupSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    users = BaseUserSerializer(many=True)


@configure("name")
class DefaultGroupSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    users = UserSerializer(many=True)


@configure()
class TeamSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    groups = DefaultGroupSerializer(many=True)


@configure("username")
class CustomSerializer(serializers.Serializer):
    def to_representation(self, instance):
        return {"username": "xformed", "bar": "baz"}


class DataSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    output = ProjectableJSONField(select="foo.bar")


@configure()
class SelectiveDataSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    output = ProjectableJSONField(select="foo.bar")


class SelectiveSerializerTest(SimpleTestCase):
    def setUp(self):
        super().setUp()

        self.user = SimpleNamespace(
            id=1,
            username="foo",
            password="secret",
            name=SimpleNamespace(first="family", last="given"),
            emails=["foo@example.com"],
        )
        self.user_2 = SimpleNamespace(
            id=2,
            username="bar",
            password="secret",
            name=SimpleNamespace(first="other", last="name"),
            emails=[],
        )
        self.user_data = {
            "id": 1,
            "username": "foo",
            "password": "secret",
            "name": {"first": "family", "last": "given"},
            "emails": ["foo@example.com"],
        }
        self.group = SimpleNamespace(id=10, name="admins", users=[self.user])

    def get_request(self, select):
        return Request(factory.get("/", {"select": select}))

    def test_plugin_fields(self):
        self.assertEqual(UserSerializer(self.user).data, {"id": 1, "username": "foo"})

        expected = dict(self.user_data)
        del expected["password"]
        self.assertEqual(UnrestrictedUserSerializer(self.user).data, expected)

    def test_meta_fields(self):
        self.assertEqual(
            MetaUserSerializer(self.user).data, {"id": 1, "name": {"first": "family"}}
        )

    def test_representation_options(self):
        self.assertEqual(
            OptionsUserSerializer(self.user).data, {"id": 1, "username": "foo"}
        )
        self.assertEqual(
            OverriddenOptionsUserSerializer(self.user).data,
            {"id": 1, "emails": ["foo@example.com"]},
        )
        serializer = OptionsUserSerializer(self.user, context={"select": "name.last"})
        self.assertEqual(serializer.data, {"id": 1, "name": {"last": "given"}})

    def test_context_fields(self):
        serializer = MetaUserSerializer(self.user, context={"select": "emails"})
        self.assertEqual(serializer.data, {"id": 1, "emails": ["foo@example.com"]})

        serializer = UserSerializer(self.user, context={"select": ""})
        self.assertEqual(serializer.data, self.user_data)

    def test_query_fields(self):
        request = self.get_request("username,name.last")
        serializer = UserSerializer(self.user, context={"request": request})
        self.assertEqual(
            serializer.data, {"id": 1, "username": "foo", "name": {"last": "given"}}
        )

        # Context takes precedence over the request.
        serializer = UserSerializer(
            self.user, context={"request": request, "select": "-password"}
        )
        expected = dict(self.user_data)
        del expected["password"]
        self.assertEqual(serializer.data, expected)

        request = Request(factory.get("/"))
        serializer = UserSerializer(self.user, context={"request": request})
        self.assertEqual(serializer.data, {"id": 1, "username": "foo"})

    def test_django_request_fields(self):
        request = RequestFactory().get("/", {"select": "username emails"})
        serializer = UserSerializer(self.user, context={"request": request})
        self.assertEqual(
            serializer.data,
            {"id": 1, "username": "foo", "emails": ["foo@example.com"]},
        )

    @override_settings(FIELDSELECT_QUERY_PARAM="fields")
    def test_query_param_setting(self):
        request = Request(factory.get("/", {"fields": "emails"}))
        serializer = UserSerializer(self.user, context={"request": request})
        self.assertEqual(serializer.data, {"id": 1, "emails": ["foo@example.com"]})

    @override_settings(FIELDSELECT_DEFAULT_FIELD="username")
    def test_default_field_setting(self):
        serializer = UserSerializer(self.user, context={"select": "emails"})
        self.assertEqual(
            serializer.data, {"username": "foo", "emails": ["foo@example.com"]}
        )

    def test_many(self):
        serializer = UserSerializer([self.user, self.user_2], many=True)
        self.assertEqual(
            serializer.data,
            [{"id": 1, "username": "foo"}, {"id": 2, "username": "bar"}],
        )

    def test_nested_defaults(self):
        self.assertEqual(
            GroupSerializer(self.group).data,
            {"id": 10, "name": "admins", "users": [{"id": 1, "username": "foo"}]},
        )

    def test_nested_fields(self):
        self.assertEqual(
            SelectiveGroupSerializer(self.group).data,
            {"id": 10, "name": "admins", "users": [{"username": "foo"}]},
        )

    def test_explicit_fields_suppress_nested(self):
        team = SimpleNamespace(id=100, groups=[self.group])
        serializer = TeamSerializer(team, context={"select": "groups"})
        self.assertEqual(
            serializer.data,
            {
                "id": 100,
                "groups": [{"id": 10, "name": "admins", "users": [self.user_data]}],
            },
        )

        request = self.get_request("groups.users.emails")
        serializer = TeamSerializer(team, context={"request": request})
        self.assertEqual(
            serializer.data,
            {"id": 100, "groups": [{"users": [{"emails": ["foo@example.com"]}]}]},
        )

    def test_explicit_empty_fields(self):
        serializer = DefaultGroupSerializer(self.group, context={"select": ""})
        self.assertEqual(
            serializer.data,
            {"id": 10, "name": "admins", "users": [{"id": 1, "username": "foo"}]},
        )
        self.assertEqual(
            DefaultGroupSerializer(self.group).data, {"id": 10, "name": "admins"}
        )

    def test_nested_logging(self):
        group = SimpleNamespace(id=10, name="admins", users=[self.user, self.user_2])
        with LogCapture("fieldselect.plugin") as log:
            DefaultGroupSerializer(group).data

        # One record for the group and one for each of its users.
        user_record = (
            "fieldselect.plugin",
            "DEBUG",
            "Resolved select fields {'username': True, 'id': True} "
            "(nested selection enabled).",
        )
        log.check(
            (
                "fieldselect.plugin",
                "DEBUG",
                "Resolved select fields {'name': True, 'id': True} "
                "(nested selection enabled).",
            ),
            user_record,
            user_record,
        )

    def test_custom_representation(self):
        self.assertEqual(CustomSerializer(self.user).data, {"username": "xformed"})

    def test_invalid(self):
        serializer = UserSerializer(self.user, context={"select": 42})
        with self.assertRaises(InvalidFieldSpec):
            serializer.data

    def test_plugin_attribute(self):
        self.assertEqual(UserSerializer.select_plugin.fields, "username")
        self.assertFalse(hasattr(BaseUserSerializer, "select_plugin"))


class ProjectableJSONFieldTest(SimpleTestCase):
    def setUp(self):
        super().setUp()

        self.output = {"foo": {"bar": 42, "hello": "world"}, "another": 3}
        self.data = SimpleNamespace(id=1, output=self.output)

    def test_projection(self):
        self.assertEqual(
            DataSerializer(self.data).data, {"id": 1, "output": {"foo": {"bar": 42}}}
        )
        # The value itself is not modified.
        self.assertEqual(
            self.output, {"foo": {"bar": 42, "hello": "world"}, "another": 3}
        )

    def test_suppressed(self):
        serializer = SelectiveDataSerializer(self.data, context={"select": "output"})
        self.assertEqual(serializer.data, {"id": 1, "output": self.output})

    def test_enclosing_defaults(self):
        serializer = SelectiveDataSerializer(self.data)
        self.assertEqual(serializer.data, {"id": 1, "output": {"foo": {"bar": 42}}})
