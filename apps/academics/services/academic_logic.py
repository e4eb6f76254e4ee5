# apps/academics/services/academic_logic.py
import logging

from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from django.utils import timezone

from ..models import Asistencia, Lapso, Matricula, Representacion, Salon

logger = logging.getLogger(__name__)
User = get_user_model()

# Estado de Asistencia -> clave del agregado que consume la boleta
_CLAVES_AGREGADO = {
    'PRESENTE': 'present',
    'TARDE': 'late',
    'AUSENTE': 'absent',
    'JUSTIFICADA': 'justifiedAbsent',
}

# --- AGREGADO DE ASISTENCIA ---

def obtener_asistencia(estudiante_id, lapso_id=None):
    """
    Cuenta los registros de asistencia del estudiante por estado.
    Con lapso, se toman los registros ligados al lapso o fechados dentro de él.
    """
    qs = Asistencia.objects.filter(estudiante_id=estudiante_id)

    if lapso_id:
        lapso = Lapso.objects.get(pk=lapso_id)
        qs = qs.filter(
            Q(lapso_id=lapso.pk) |
            Q(lapso__isnull=True, fecha__gte=lapso.fecha_inicio, fecha__lte=lapso.fecha_fin)
        )

    agregado = {clave: 0 for clave in _CLAVES_AGREGADO.values()}
    for fila in qs.values('estado').annotate(total=Count('id')):
        clave = _CLAVES_AGREGADO.get(fila['estado'])
        if clave:
            agregado[clave] = fila['total']
    return agregado

# --- CONSULTAS DE PLANTILLA (ROSTER) ---
# Cada consulta es independiente: si falla, quien la usa decide el reemplazo.

def salon_de_estudiante(estudiante_id):
    """Salón activo del estudiante o None si no tiene matrícula vigente."""
    matricula = (
        Matricula.objects
        .filter(estudiante_id=estudiante_id, activo=True)
        .select_related('salon')
        .order_by('-id')
        .first()
    )
    return matricula.salon if matricula else None


def nombre_salon_de_estudiante(estudiante_id):
    salon = salon_de_estudiante(estudiante_id)
    return salon.nombre if salon else None


def docente_de_salon(salon_id):
    """Id del docente guía del salón (None si no tiene)."""
    return Salon.objects.values_list('docente_id', flat=True).get(pk=salon_id)


def nombre_usuario(user_id):
    user = User.objects.get(pk=user_id)
    return user.get_full_name() or user.username


def documento_usuario(user_id):
    user = User.objects.select_related('perfil').get(pk=user_id)
    return user.perfil.numero_documento


def nombre_docente_de_estudiante(estudiante_id):
    salon = salon_de_estudiante(estudiante_id)
    if salon is None:
        return None
    docente_id = docente_de_salon(salon.pk)
    return nombre_usuario(docente_id) if docente_id else None


def representante_de(estudiante_id):
    """Nombre del primer representante registrado del estudiante."""
    relacion = (
        Representacion.objects
        .filter(estudiante_id=estudiante_id)
        .select_related('representante')
        .order_by('id')
        .first()
    )
    if relacion is None:
        return None
    rep = relacion.representante
    return rep.get_full_name() or rep.username

# --- AYUDANTES DE TIEMPO ---

def lapso_actual(lapsos, hoy=None):
    """Primer lapso cuyo rango contiene la fecha de hoy (o None)."""
    hoy = hoy or timezone.localdate()
    for lapso in lapsos:
        if lapso.fecha_inicio <= hoy <= lapso.fecha_fin:
            return lapso
    return None
