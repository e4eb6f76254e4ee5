# apps/boletas/services/asistencia.py
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone as dt_timezone
from typing import Optional

from django.utils.dateparse import parse_date, parse_datetime

logger = logging.getLogger(__name__)

SABADO = 5
DOMINGO = 6

# ===================================================================
# DÍAS HÁBILES DEL LAPSO
# ===================================================================

def fecha_calendario(valor) -> Optional[date]:
    """
    Lleva fechas, datetimes o textos ISO a una fecha de calendario UTC.
    Las horas y zonas horarias locales no deben correr el día.
    """
    if valor is None or valor == '':
        return None
    if isinstance(valor, datetime):
        if valor.tzinfo is not None:
            valor = valor.astimezone(dt_timezone.utc)
        return valor.date()
    if isinstance(valor, date):
        return valor

    texto = str(valor).strip()
    dt = parse_datetime(texto)
    if dt is not None:
        return fecha_calendario(dt)
    return parse_date(texto[:10])


def contar_dias_habiles(inicio, fin) -> int:
    """Días de lunes a viernes en [inicio, fin], ambos inclusive."""
    inicio = fecha_calendario(inicio)
    fin = fecha_calendario(fin)
    if inicio is None or fin is None or inicio > fin:
        return 0

    total_dias = (fin - inicio).days + 1
    semanas, resto = divmod(total_dias, 7)
    habiles = semanas * 5
    for offset in range(resto):
        if (inicio + timedelta(days=offset)).weekday() not in (SABADO, DOMINGO):
            habiles += 1
    return habiles


def _entero_o_none(valor) -> Optional[int]:
    if valor is None or isinstance(valor, bool):
        return None
    texto = str(valor).strip()
    if not texto:
        return None
    try:
        return int(float(texto))
    except ValueError:
        return None


def prefijar_dias_habiles(actual, inicio, fin):
    """
    Sugiere los días hábiles solo si el campo está vacío o en cero.
    Un valor distinto de cero (calculado o escrito a mano) nunca se reemplaza.
    """
    if _entero_o_none(actual):
        return actual
    return contar_dias_habiles(inicio, fin)

# ===================================================================
# CONCILIACIÓN DE ASISTENCIA
# ===================================================================

@dataclass(frozen=True)
class ResumenAsistencia:
    presentes: int = 0
    tardes: int = 0
    ausentes: int = 0
    justificadas: int = 0
    total: int = 0

    @property
    def asistidos(self):
        return self.presentes + self.tardes

    @property
    def inasistidos(self):
        return self.ausentes + self.justificadas

    @property
    def tasa_asistencia(self):
        return self.asistidos / self.total if self.total > 0 else 0

    @property
    def tasa_inasistencia(self):
        return self.inasistidos / self.total if self.total > 0 else 0

    def porcentaje_asistencia(self):
        return _porcentaje(self.tasa_asistencia, self.total)

    def porcentaje_inasistencia(self):
        return _porcentaje(self.tasa_inasistencia, self.total)

    def to_snapshot(self):
        """Formato persistido dentro de la boleta."""
        return {
            'present': self.presentes,
            'late': self.tardes,
            'absent': self.ausentes,
            'justifiedAbsent': self.justificadas,
            'total': self.total,
        }

    @classmethod
    def from_snapshot(cls, snapshot):
        snapshot = snapshot or {}
        return resolver_asistencia(snapshot, snapshot.get('total'))


def _porcentaje(tasa, total):
    return f"{tasa * 100:.1f}%" if total > 0 else '0%'


def _conteo(agregado, clave):
    valor = _entero_o_none(agregado.get(clave))
    return max(valor or 0, 0)


def resolver_asistencia(agregado, dias_habiles=None) -> ResumenAsistencia:
    """
    Une el agregado de asistencia con los días hábiles guardados.
    total = dias_habiles si viene informado y distinto de cero;
    si no, asistidos + inasistidos.
    """
    agregado = agregado or {}
    presentes = _conteo(agregado, 'present')
    tardes = _conteo(agregado, 'late')
    ausentes = _conteo(agregado, 'absent')
    justificadas = _conteo(agregado, 'justifiedAbsent')

    total = presentes + tardes + ausentes + justificadas
    if dias_habiles is not None and str(dias_habiles).strip() not in ('', '0'):
        override = _entero_o_none(dias_habiles)
        if override is not None and override > 0:
            total = override
        elif override is None:
            logger.warning(f"Días hábiles no numéricos ('{dias_habiles}'); se usa el total registrado ({total})")
        else:
            logger.warning(f"Días hábiles no positivos ({override}); se usa el total registrado ({total})")

    return ResumenAsistencia(
        presentes=presentes,
        tardes=tardes,
        ausentes=ausentes,
        justificadas=justificadas,
        total=total,
    )
