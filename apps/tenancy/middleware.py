# apps/tenancy/middleware.py
import logging

from .utils import set_current_tenant, reset_current_tenant

logger = logging.getLogger(__name__)


class TenantMiddleware:
    """
    Activa el colegio del usuario autenticado durante la petición.
    El colegio se toma del perfil; usuarios sin perfil operan sin filtro.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        tenant = None
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            perfil = getattr(user, 'perfil', None)
            tenant = getattr(perfil, 'tenant', None)

        token = set_current_tenant(tenant)
        try:
            return self.get_response(request)
        finally:
            reset_current_tenant(token)
