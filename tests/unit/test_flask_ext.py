"""Tests for the Flask integration: request-scoped rendering context and template injection."""

from flask import Flask, g, render_template_string

from formbinding import metrics
from formbinding.flask_ext import (
    DEFAULT_TEMPLATE_DATA_ATTR,
    EXTENSION_NAME,
    FormRendering,
    get_template_data,
    validate_form,
)
from formbinding.forms import LogInForm
from formbinding.violations import REQUIRED_ERROR, ViolationSet

SIGNIN_TEMPLATE = (
    "{% if HasError %}<div class=\"error\">{{ ErrorMsg }}</div>{% endif %}"
    "<input name=\"username\" value=\"{{ username }}\""
    "{% if Err_UserName %} class=\"error\"{% endif %}>"
)


class TestFormRendering:

    def test_extension_registered(self, app):
        assert isinstance(app.extensions[EXTENSION_NAME], FormRendering)

    def test_config_defaults(self):
        app = Flask(__name__)
        FormRendering(app)

        assert app.config['FORMS_TEMPLATE_DATA_ATTR'] == DEFAULT_TEMPLATE_DATA_ATTR
        assert app.config['FORMS_INJECT_TEMPLATE_DATA'] is True

    def test_init_app_applies_metrics_setting(self, app):
        assert metrics.is_enabled() is False

    def test_deferred_init_app(self):
        app = Flask(__name__)
        app.config['FORMS_TEMPLATE_DATA_ATTR'] = 'tmpl'
        extension = FormRendering()
        extension.init_app(app)

        with app.test_request_context('/'):
            get_template_data()['Title'] = 'Install'
            assert g.tmpl == {'Title': 'Install'}


class TestTemplateData:

    def test_created_once_per_request(self, app):
        with app.test_request_context('/'):
            data = get_template_data()
            data['Title'] = 'Sign In'

            assert get_template_data() is data

    def test_not_shared_between_requests(self, app):
        with app.test_request_context('/'):
            get_template_data()['Title'] = 'Sign In'

        with app.test_request_context('/'):
            assert get_template_data() == {}

    def test_stored_on_g(self, app, request_context):
        data = get_template_data()

        assert getattr(g, DEFAULT_TEMPLATE_DATA_ATTR) is data


class TestValidateForm:

    def test_validates_into_request_context(self, app, request_context):
        form = LogInForm(UserName='', Password='secret-pass')

        data = validate_form(form, ViolationSet(fields={'UserName': REQUIRED_ERROR}))

        assert data is get_template_data()
        assert data['ErrorMsg'] == "Username cannot be empty"
        assert data['passwd'] == 'secret-pass'

    def test_template_sees_rendering_context(self, app, request_context):
        validate_form(LogInForm(UserName=''), ViolationSet(fields={'UserName': REQUIRED_ERROR}))

        html = render_template_string(SIGNIN_TEMPLATE)

        assert '<div class="error">Username cannot be empty</div>' in html
        assert 'class="error">' in html

    def test_template_redisplays_input_after_failure(self, app, request_context):
        validate_form(LogInForm(UserName='unknwon'), ViolationSet(fields={'Password': REQUIRED_ERROR}))

        html = render_template_string(SIGNIN_TEMPLATE)

        assert 'value="unknwon"' in html
        assert 'Password cannot be empty' in html

    def test_valid_submission_renders_clean_form(self, app, request_context):
        validate_form(LogInForm(UserName='unknwon'), ViolationSet())

        html = render_template_string(SIGNIN_TEMPLATE)

        assert 'error' not in html
        assert 'value=""' in html

    def test_injection_disabled(self):
        app = Flask(__name__)
        app.config['FORMS_INJECT_TEMPLATE_DATA'] = False
        FormRendering(app)

        with app.test_request_context('/'):
            validate_form(LogInForm(UserName=''), ViolationSet(fields={'UserName': REQUIRED_ERROR}))
            html = render_template_string(SIGNIN_TEMPLATE)

        assert 'Username cannot be empty' not in html
