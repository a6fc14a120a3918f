"""
handlers/ - Presentation Layer
================================
Telegram bot handlers. Each handler parses the command, delegates to the
user's BudgetStore or a reporting service, and sends the response back.
No budget logic lives here.
"""
