"""
Email Messages

Builds the account emails sent by the auth and user use cases.
"""

from html import escape

from .notifier import EmailMessage

COMPANY_NAME = "AdiTeke Software Solutions"


def welcome_email(
    email: str, name: str, username: str, temporary_password: str, login_url: str
) -> EmailMessage:
    """Welcome email carrying the temporary password of a new account."""
    text = (
        f"Hello {name},\n\n"
        f"Welcome to {COMPANY_NAME}! Your account has been created successfully.\n\n"
        f"Your login details:\n"
        f"Username: {username}\n"
        f"Temporary Password: {temporary_password}\n\n"
        f"For security reasons, you will be required to change your password "
        f"when you first log in.\n\n"
        f"Log in here: {login_url}\n\n"
        f"Best regards,\n{COMPANY_NAME} Team"
    )
    html = (
        f"<p>Hello {escape(name)},</p>"
        f"<p>Welcome to {COMPANY_NAME}! Your account has been created successfully.</p>"
        f"<p><strong>Your login details:</strong><br>"
        f"Username: <strong>{escape(username)}</strong><br>"
        f"Temporary Password: <strong>{escape(temporary_password)}</strong></p>"
        f"<p><strong>For security reasons, you will be required to change your "
        f"password when you first log in.</strong></p>"
        f'<p><a href="{escape(login_url)}">Log In Now</a></p>'
        f"<p>Best regards,<br>{COMPANY_NAME} Team</p>"
    )
    return EmailMessage(
        to=email, subject=f"Welcome to {COMPANY_NAME}", text=text, html=html
    )


def password_reset_email(
    email: str, name: str, username: str, reset_link: str, expiry_minutes: int
) -> EmailMessage:
    text = (
        f"Hello {name},\n\n"
        f"We received a request to reset the password for your account ({username}).\n\n"
        f"Reset your password here: {reset_link}\n\n"
        f"This link expires in {expiry_minutes} minutes. If you did not request "
        f"a password reset, you can ignore this email.\n\n"
        f"Best regards,\n{COMPANY_NAME} Team"
    )
    html = (
        f"<p>Hello {escape(name)},</p>"
        f"<p>We received a request to reset the password for your account "
        f"(<strong>{escape(username)}</strong>).</p>"
        f'<p><a href="{escape(reset_link)}">Reset Password</a></p>'
        f"<p>This link expires in {expiry_minutes} minutes. If you did not request "
        f"a password reset, you can ignore this email.</p>"
        f"<p>Best regards,<br>{COMPANY_NAME} Team</p>"
    )
    return EmailMessage(
        to=email, subject=f"Reset your {COMPANY_NAME} password", text=text, html=html
    )
