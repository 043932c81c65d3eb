# helpdesk/__init__.py
# Backend do HelpDesk: clientes, técnicos e chamados sobre Flask + SQLAlchemy.

__version__ = "1.0.0"
