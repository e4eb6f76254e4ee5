from contextvars import ContextVar

# Variable segura para hilos y async
_current_tenant = ContextVar('current_tenant', default=None)


def get_current_tenant():
    """Retorna el colegio activo en la petición actual."""
    return _current_tenant.get()


def set_current_tenant(tenant):
    """Define el colegio activo. Retorna un token para resetearlo después."""
    return _current_tenant.set(tenant)


def reset_current_tenant(token):
    """Limpia la memoria al finalizar el request."""
    _current_tenant.reset(token)
