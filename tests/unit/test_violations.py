"""Unit tests for violation sets and the marshmallow adapter."""

import pytest
from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from formbinding.forms import LogInForm, RegisterForm
from formbinding.rules import RuleKind
from formbinding.validation import ERROR_MSG_KEY, HAS_ERROR_KEY
from formbinding.violations import MIN_SIZE_ERROR, REQUIRED_ERROR, ViolationSet


class LogInSchema(Schema):
    """Schema reporting rule names as its error messages."""

    username = fields.String(
        required=True,
        error_messages={'required': REQUIRED_ERROR},
        validate=validate.Length(max=35, error='MaxSize')
    )
    passwd = fields.String(
        required=True,
        error_messages={'required': REQUIRED_ERROR},
        validate=validate.Length(min=6, max=30, error=MIN_SIZE_ERROR)
    )
    remember = fields.Boolean(load_default=False)


class RegisterSchema(Schema):
    username = fields.String(required=True, error_messages={'required': REQUIRED_ERROR})
    passwd = fields.String(required=True, error_messages={'required': REQUIRED_ERROR})
    retypepasswd = fields.String(load_default='')

    @validates_schema
    def validate_retype(self, data, **kwargs):
        if data.get('passwd') != data.get('retypepasswd'):
            raise ValidationError('PasswordMismatch')


class TestViolationSet:

    def test_empty(self):
        violations = ViolationSet()

        assert violations.count() == 0
        assert len(violations) == 0

    def test_count_includes_overall_and_fields(self):
        violations = ViolationSet(overall=['ContentTypeError'], fields={'UserName': REQUIRED_ERROR})

        assert violations.count() == 2

    def test_first_field_violation_wins(self):
        violations = ViolationSet()
        violations.add_field('UserName', REQUIRED_ERROR)
        violations.add_field('UserName', 'MaxSize')

        assert violations.fields == {'UserName': REQUIRED_ERROR}

    def test_rule_kind_member_stored_as_name(self):
        violations = ViolationSet()
        violations.add_field('UserName', RuleKind.REQUIRED)

        assert violations.fields == {'UserName': REQUIRED_ERROR}
        assert type(violations.fields['UserName']) is str

    def test_rule_kind_member_renders_message(self, context):
        violations = ViolationSet()
        violations.add_field('UserName', RuleKind.REQUIRED)

        LogInForm().validate(violations, context)

        assert context[ERROR_MSG_KEY] == "Username cannot be empty"

    def test_add_overall_keeps_order(self):
        violations = ViolationSet()
        violations.add_overall('first')
        violations.add_overall('second')

        assert violations.overall == ['first', 'second']

    def test_instances_do_not_share_state(self):
        first = ViolationSet()
        first.add_field('UserName', REQUIRED_ERROR)

        assert ViolationSet().fields == {}


class TestFromMarshmallow:

    def _load_error(self, schema, data):
        with pytest.raises(ValidationError) as exc_info:
            schema.load(data)
        return exc_info.value

    def test_wire_names_mapped_to_fields(self):
        error = self._load_error(LogInSchema(), {'passwd': 'abc'})

        violations = ViolationSet.from_marshmallow(error, LogInForm)

        assert violations.overall == []
        assert violations.fields == {'UserName': REQUIRED_ERROR, 'Password': MIN_SIZE_ERROR}

    def test_schema_errors_become_overall(self):
        error = self._load_error(RegisterSchema(), {'username': 'joe', 'passwd': 'a', 'retypepasswd': 'b'})

        violations = ViolationSet.from_marshmallow(error, RegisterForm)

        assert violations.overall == ['PasswordMismatch']
        assert violations.fields == {}

    def test_unknown_keys_become_overall(self):
        error = ValidationError({'captcha': [REQUIRED_ERROR], 'username': [REQUIRED_ERROR]})

        violations = ViolationSet.from_marshmallow(error, LogInForm)

        assert violations.overall == ['captcha: Required']
        assert violations.fields == {'UserName': REQUIRED_ERROR}

    def test_attribute_names_accepted(self):
        error = ValidationError({'Password': ['MaxSize', REQUIRED_ERROR]})

        violations = ViolationSet.from_marshmallow(error, LogInForm)

        assert violations.fields == {'Password': 'MaxSize'}

    def test_without_form_type_keys_are_kept(self):
        error = ValidationError({'username': [REQUIRED_ERROR]})

        violations = ViolationSet.from_marshmallow(error)

        assert violations.fields == {'username': REQUIRED_ERROR}

    def test_plain_message_becomes_overall(self):
        violations = ViolationSet.from_marshmallow(ValidationError('Invalid input type.'))

        assert violations.overall == ['Invalid input type.']
        assert violations.fields == {}

    def test_converted_errors_render_message(self, context):
        form = LogInForm(UserName='joe', Password='abc')
        error = self._load_error(LogInSchema(), {'username': 'joe', 'passwd': 'abc'})

        form.validate(ViolationSet.from_marshmallow(error, LogInForm), context)

        assert context[HAS_ERROR_KEY] is True
        assert context[ERROR_MSG_KEY] == "Password must contain at least 6 characters"

    def test_schema_level_failure_is_not_rendered(self, context):
        form = RegisterForm(UserName='joe', Password='abcdef', RetypePasswd='abcdeg')
        error = self._load_error(
            RegisterSchema(),
            {'username': 'joe', 'passwd': 'abcdef', 'retypepasswd': 'abcdeg'}
        )

        form.validate(ViolationSet.from_marshmallow(error, RegisterForm), context)

        assert context == {}
