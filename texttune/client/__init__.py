from texttune.client.backend import BackendClient, BackendError
from texttune.client.form import FormController

__all__ = ["BackendClient", "BackendError", "FormController"]
