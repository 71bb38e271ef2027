"""
Web forms.

Each form is a dataclass declaring, per field, the wire name it binds from and
the rules the rule engine checks. ``labels`` maps field names to the display
names used in error messages.
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, MutableMapping

from .descriptor import RecordDescriptor, describe, form_field
from .validation import validate
from .violations import ViolationSet

_WORD_BOUNDARY_RE = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|_+')


def default_label(field: str) -> str:
    """Derive a display name from a field name, e.g. ``RetypePasswd`` -> ``Retype passwd``."""
    words = _WORD_BOUNDARY_RE.sub(' ', field).strip().lower()
    return words[:1].upper() + words[1:]


class Form:
    """Base class of all web forms."""

    labels: ClassVar[Dict[str, str]] = {}

    def name(self, field: str) -> str:
        """Display name of ``field`` used in error messages."""
        label = self.labels.get(field)
        if label is None:
            return default_label(field)
        return label

    @classmethod
    def describe(cls) -> RecordDescriptor:
        return describe(cls)

    def validate(self, errors: ViolationSet, context: MutableMapping[str, Any]) -> None:
        validate(errors, context, self)


@dataclass
class RegisterForm(Form):
    UserName: str = form_field('username', 'Required;AlphaDashDot;MaxSize(30)')
    Email: str = form_field('email', 'Required;Email;MaxSize(50)')
    Password: str = form_field('passwd', 'Required;MinSize(6);MaxSize(30)')
    RetypePasswd: str = form_field('retypepasswd')
    LoginType: str = form_field('logintype')
    LoginName: str = form_field('loginname')

    labels: ClassVar[Dict[str, str]] = {
        'UserName': 'Username',
        'Email': 'E-mail address',
        'Password': 'Password',
        'RetypePasswd': 'Re-type password',
    }


@dataclass
class LogInForm(Form):
    UserName: str = form_field('username', 'Required;MaxSize(35)')
    Password: str = form_field('passwd', 'Required;MinSize(6);MaxSize(30)')
    Remember: bool = form_field('remember', default=False)

    labels: ClassVar[Dict[str, str]] = {
        'UserName': 'Username',
        'Password': 'Password',
    }


@dataclass
class InstallForm(Form):
    Database: str = form_field('database', 'Required')
    Host: str = form_field('host')
    User: str = form_field('user')
    Passwd: str = form_field('passwd')
    DatabaseName: str = form_field('database_name')
    SslMode: str = form_field('ssl_mode')
    DatabasePath: str = form_field('database_path')
    RepoRootPath: str = form_field('repo_path')
    RunUser: str = form_field('run_user')
    Domain: str = form_field('domain')
    AppUrl: str = form_field('app_url')
    AdminName: str = form_field('admin_name', 'Required;AlphaDashDot;MaxSize(30)')
    AdminPasswd: str = form_field('admin_pwd', 'Required;MinSize(6);MaxSize(30)')
    AdminEmail: str = form_field('admin_email', 'Required;Email;MaxSize(50)')
    SmtpHost: str = form_field('smtp_host')
    SmtpEmail: str = form_field('mailer_user')
    SmtpPasswd: str = form_field('mailer_pwd')
    RegisterConfirm: str = form_field('register_confirm')
    MailNotify: str = form_field('mail_notify')

    labels: ClassVar[Dict[str, str]] = {
        'Database': 'Database name',
        'AdminName': 'Admin user name',
        'AdminPasswd': 'Admin password',
        'AdminEmail': 'Admin e-mail address',
    }
