"""Configuration management."""
from .settings import *
from .template_loader import StatementTemplate, StatementTemplateLoader, get_template_loader

__all__ = ['StatementTemplate', 'StatementTemplateLoader', 'get_template_loader']
