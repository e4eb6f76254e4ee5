# tasks/decorators.py
import logging
from functools import wraps

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def rol_de(user):
    """Rol del usuario según su perfil (None si no tiene perfil)."""
    perfil = getattr(user, 'perfil', None)
    return getattr(perfil, 'rol', None)


def role_required(roles):
    """
    Restringe una vista a uno o varios roles de Perfil.
    Los superusuarios siempre pasan.
    """
    if isinstance(roles, str):
        roles = [roles]

    def decorator(view_func):
        @wraps(view_func)
        @login_required
        def _wrapped(request, *args, **kwargs):
            user = request.user
            if user.is_superuser or rol_de(user) in roles:
                return view_func(request, *args, **kwargs)
            logger.warning(f"⛔ Acceso denegado a {view_func.__name__} para {user.username} (rol={rol_de(user)})")
            return JsonResponse({'success': False, 'error': 'No tiene permisos para esta acción.'}, status=403)
        return _wrapped
    return decorator
