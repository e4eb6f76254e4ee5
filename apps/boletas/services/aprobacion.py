# apps/boletas/services/aprobacion.py
"""
Estados de aprobación de una boleta: PENDIENTE -> CONFIRMADA | RECHAZADA.

* Un revisor que crea una boleta la deja CONFIRMADA.
* Cualquier guardado de un autor no revisor la deja PENDIENTE (aunque ya
  estuviera aprobada) y avisa a los revisores.
* Un revisor que edita conserva el estado anterior.
* Aprobar y rechazar son acciones exclusivas de revisores.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from tasks.decorators import rol_de
from tasks.utils import notificar_rol, notificar_usuario
from .codec import EstadoBoleta
from ..exceptions import TransicionInvalidaError

logger = logging.getLogger(__name__)

ROLES_REVISORES = getattr(settings, 'BOLETAS_ROLES_REVISORES', ['ADMINISTRADOR'])
ROL_NOTIFICADO = getattr(settings, 'BOLETAS_ROL_NOTIFICADO', 'ADMINISTRADOR')


@dataclass(frozen=True)
class Transicion:
    estado: EstadoBoleta
    notificar_revisores: bool = False


def es_revisor(user) -> bool:
    if user is None:
        return False
    return bool(getattr(user, 'is_superuser', False)) or rol_de(user) in ROLES_REVISORES


def estado_al_guardar(privilegiado, estado_previo: Optional[EstadoBoleta] = None) -> Transicion:
    if not privilegiado:
        return Transicion(EstadoBoleta.PENDIENTE, notificar_revisores=True)
    if estado_previo is None:
        return Transicion(EstadoBoleta.CONFIRMADA)
    return Transicion(EstadoBoleta(estado_previo))


def estado_al_aprobar(privilegiado) -> Transicion:
    if not privilegiado:
        raise TransicionInvalidaError("Solo la administración puede aprobar boletas.")
    return Transicion(EstadoBoleta.CONFIRMADA)


def estado_al_rechazar(privilegiado) -> Transicion:
    if not privilegiado:
        raise TransicionInvalidaError("Solo la administración puede rechazar boletas.")
    return Transicion(EstadoBoleta.RECHAZADA)

# ===================================================================
# EFECTOS: NOTIFICACIONES
# ===================================================================

def notificar_revisores(certificado_id, autor_nombre, estudiante_nombre, nivel, enlace, tenant=None):
    """
    Solicitud de revisión al grupo de revisores.
    No interrumpe el guardado: un fallo queda en el log.
    """
    titulo = f"[BOLETA_REQUEST][ID:{certificado_id}] Revisión de Boleta"
    contenido = (
        f"El profesor {autor_nombre} ha generado/editado una boleta para "
        f"{estudiante_nombre} ({nivel}). Requiere revisión.\n\nURL: {enlace}"
    )
    try:
        return notificar_rol(ROL_NOTIFICADO, titulo, contenido, tipo='BOLETA', link=enlace, tenant=tenant)
    except Exception as e:
        logger.warning(f"No se pudo notificar la revisión de la boleta {certificado_id}: {e}", exc_info=True)
        return 0


def notificar_creador(creador_id, revisor, certificado_id, estudiante_nombre, estado, enlace, motivo=''):
    """Aviso al autor original cuando un revisor distinto aprueba o rechaza."""
    if not creador_id or creador_id == getattr(revisor, 'pk', None):
        return None

    if estado == EstadoBoleta.CONFIRMADA:
        titulo = "[BOLETA_STATUS] Boleta Aprobada"
        contenido = f"La boleta de {estudiante_nombre} ha sido aprobada por la administración."
    else:
        titulo = "[BOLETA_STATUS] Boleta Rechazada"
        contenido = f"La boleta de {estudiante_nombre} ha sido rechazada por la administración."
        if motivo:
            contenido += f"\n\nMotivo: {motivo}"
    contenido += f"\n\nURL: {enlace}"

    try:
        return notificar_usuario(creador_id, titulo, contenido, tipo='BOLETA', link=enlace)
    except Exception as e:
        logger.warning(f"No se pudo notificar al autor {creador_id} de la boleta {certificado_id}: {e}")
        return None
