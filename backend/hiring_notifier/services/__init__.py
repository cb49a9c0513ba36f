# Services package init
"""
Hiring Notifier Backend — Services Layer
=========================================

What:  Business logic between routes (HTTP) and the RecordStore (files).

Service Inventory:
    - TeamDirectory: team lookup, validation and CRUD
    - ApplicationRepository: application persistence, filters and stats
    - MailTransport (abstract): interface for outbound mail delivery
    - SmtpTransport: MailTransport over smtplib
    - NotificationDispatcher: renders the email, sends or simulates it
    - SubmissionService: validate → resolve team → persist → notify
"""
