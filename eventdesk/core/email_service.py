import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional

from eventdesk.core.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self):
        self.smtp_server = settings.SMTP_SERVER
        self.smtp_port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.from_email = settings.FROM_EMAIL
        self.from_name = settings.FROM_NAME

    def send_email(
        self,
        to_emails: List[str],
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """Send email over SMTP with STARTTLS"""

        if not settings.SEND_EMAILS:
            logger.info(f"Email sending disabled. Would send: {subject} to {to_emails}")
            return True

        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = f"{self.from_name} <{self.from_email}>"
            message["To"] = ", ".join(to_emails)

            if text_content:
                message.attach(MIMEText(text_content, "plain"))
            message.attach(MIMEText(html_content, "html"))

            context = ssl.create_default_context()
            with smtplib.SMTP(self.smtp_server, self.smtp_port, timeout=settings.EMAIL_TIMEOUT) as server:
                server.starttls(context=context)
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.sendmail(self.from_email, to_emails, message.as_string())

            logger.info(f"Email sent successfully to {to_emails}")
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_emails}: {str(e)}")
            return False

    def send_registration_confirmation(
        self,
        to_email: str,
        name: str,
        event_title: str,
        registration_type: str,
        waitlist_position: Optional[int] = None,
    ) -> bool:
        """Confirm a waitlist join or presale request to the attendee"""
        if registration_type == "waitlist":
            subject = f"You're on the waitlist for {event_title}"
            body = (
                f"You're number {waitlist_position} on the waitlist for <strong>{event_title}</strong>. "
                "We'll contact people in order if spots become available."
            )
            text_body = (
                f"You're number {waitlist_position} on the waitlist for {event_title}. "
                "We'll contact people in order if spots become available."
            )
        else:
            subject = f"Presale request received for {event_title}"
            body = f"We'll let you know as soon as tickets for <strong>{event_title}</strong> become available."
            text_body = f"We'll let you know as soon as tickets for {event_title} become available."

        html_content = f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <title>{subject}</title>
            <style>
                body {{ font-family: Arial, sans-serif; margin: 0; padding: 20px; background-color: #f5f5f5; }}
                .container {{ max-width: 600px; margin: 0 auto; background-color: white; padding: 30px; border-radius: 10px; }}
                .title {{ color: #1f2937; font-size: 20px; margin: 20px 0; }}
                .message {{ color: #4b5563; line-height: 1.6; margin: 20px 0; }}
                .footer {{ text-align: center; margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }}
            </style>
        </head>
        <body>
            <div class="container">
                <h2 class="title">Hi {name},</h2>
                <div class="message">{body}</div>
                <div class="footer">
                    <p>This is an automated message from {self.from_name}</p>
                </div>
            </div>
        </body>
        </html>
        """

        text_content = f"""
        Hi {name},

        {text_body}

        ---
        This is an automated message from {self.from_name}
        """

        return self.send_email([to_email], subject, html_content, text_content)


email_service = EmailService()
