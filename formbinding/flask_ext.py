"""
Flask integration.

The rendering context of a request lives on ``flask.g`` and is exposed to
templates through a context processor, so a view can validate a bound form
and render its template without passing the error keys around::

    forms = FormRendering(app)

    @app.route('/user/login', methods=['POST'])
    def login():
        form = LogInForm(**bind(request.form))
        data = validate_form(form, check(form))
        if data.get('HasError'):
            return render_template('user/signin.html')
"""

from typing import Any, Dict, Optional

import structlog
from flask import Flask, current_app, g

from . import metrics
from .forms import Form
from .violations import ViolationSet

logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATE_DATA_ATTR = 'template_data'
EXTENSION_NAME = 'formbinding'


class FormRendering:
    """Flask extension holding formbinding settings for an application."""

    def __init__(self, app: Optional[Flask] = None):
        self.template_data_attr = DEFAULT_TEMPLATE_DATA_ATTR
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """
        Initialize the extension with a Flask application.

        Args:
            app: Flask application instance
        """
        app.config.setdefault('FORMS_TEMPLATE_DATA_ATTR', DEFAULT_TEMPLATE_DATA_ATTR)
        app.config.setdefault('FORMS_INJECT_TEMPLATE_DATA', True)
        app.config.setdefault('FORMS_METRICS_ENABLED', True)

        self.template_data_attr = app.config['FORMS_TEMPLATE_DATA_ATTR']
        metrics.set_enabled(app.config['FORMS_METRICS_ENABLED'])

        if app.config['FORMS_INJECT_TEMPLATE_DATA']:
            app.context_processor(self._inject_template_data)

        app.extensions[EXTENSION_NAME] = self
        logger.info(
            "Form rendering initialized",
            app=app.import_name,
            template_data_attr=self.template_data_attr,
            inject_template_data=app.config['FORMS_INJECT_TEMPLATE_DATA']
        )

    def _inject_template_data(self) -> Dict[str, Any]:
        return dict(get_template_data())


def _template_data_attr() -> str:
    extension = current_app.extensions.get(EXTENSION_NAME)
    if extension is None:
        return DEFAULT_TEMPLATE_DATA_ATTR
    return extension.template_data_attr


def get_template_data() -> Dict[str, Any]:
    """Return the rendering context of the current request, creating it on first use."""
    attr = _template_data_attr()
    data = g.get(attr)
    if data is None:
        data = {}
        setattr(g, attr, data)
    return data


def validate_form(form: Form, errors: ViolationSet) -> Dict[str, Any]:
    """
    Validate ``form`` into the current request's rendering context.

    Returns:
        The rendering context
    """
    data = get_template_data()
    form.validate(errors, data)
    return data
