# tasks/utils.py
import logging

from django.contrib.auth import get_user_model

from .models import Notificacion

logger = logging.getLogger(__name__)
User = get_user_model()


def notificar_usuario(user_id, titulo, contenido, tipo='SISTEMA', link=None):
    """Crea una notificación interna para un usuario concreto."""
    return Notificacion.objects.create(
        usuario_id=user_id,
        titulo=titulo[:150],
        mensaje=contenido,
        tipo=tipo,
        link_destino=link,
    )


def notificar_rol(rol, titulo, contenido, tipo='SISTEMA', link=None, tenant=None):
    """
    Envía la misma notificación a todos los usuarios activos de un rol.
    Retorna el número de notificaciones creadas.
    """
    destinatarios = User.objects.filter(is_active=True, perfil__rol=rol)
    if tenant is not None:
        destinatarios = destinatarios.filter(perfil__tenant=tenant)

    notificaciones = [
        Notificacion(
            usuario=u,
            titulo=titulo[:150],
            mensaje=contenido,
            tipo=tipo,
            link_destino=link,
        )
        for u in destinatarios
    ]
    Notificacion.objects.bulk_create(notificaciones)
    logger.info(f"📣 Notificación '{titulo}' enviada a {len(notificaciones)} usuario(s) con rol {rol}")
    return len(notificaciones)
