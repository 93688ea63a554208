from wizard.cli.main import app

__all__ = ('app',)
