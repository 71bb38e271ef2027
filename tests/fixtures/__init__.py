"""
Test fixtures package.

Form Fixtures (form_fixtures.py):
    - ProfileForm, a form with an excluded field
    - Populated RegisterForm, LogInForm, InstallForm and ProfileForm instances
"""
