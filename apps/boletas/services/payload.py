# apps/boletas/services/payload.py
"""
Modelo de la boleta guardada dentro del certificado.

Las claves JSON son las de los registros existentes (level, data, turno,
attendance, schoolName, lapso, createdBy) para que las boletas ya emitidas
se sigan leyendo sin migración.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .asistencia import fecha_calendario

# --- CLAVES DENTRO DE `data` ---
CAMPO_CARACTERISTICAS = 'schoolPerformanceFeatures'
CAMPO_HABITOS = 'actitudesHabitos'
CAMPO_RECOMENDACIONES_DOCENTE = 'recomendacionesDocente'
CAMPO_DIAS_HABILES = 'diasHabiles'
CAMPO_ASISTENCIAS_MANUAL = 'asistenciasManual'
CAMPO_INASISTENCIAS_MANUAL = 'inasistenciasManual'
CAMPO_DOCENTE_SECUNDARIO = 'docenteSecundario'

PATRON_CLAVE_MARCA = re.compile(r'^(\d+)-(\d+)$')

TURNOS = ('Mañana', 'Tarde')
TURNO_POR_DEFECTO = 'Mañana'


def es_clave_marca(clave) -> bool:
    return isinstance(clave, str) and PATRON_CLAVE_MARCA.match(clave) is not None


@dataclass(frozen=True)
class LapsoSnapshot:
    """Copia del lapso al momento de guardar; no sigue los cambios del lapso real."""
    id: Optional[int]
    nombre: str
    fecha_inicio: Optional[str] = None
    fecha_fin: Optional[str] = None

    @classmethod
    def desde_lapso(cls, lapso):
        return cls(
            id=lapso.pk,
            nombre=lapso.nombre,
            fecha_inicio=lapso.fecha_inicio.isoformat() if lapso.fecha_inicio else None,
            fecha_fin=lapso.fecha_fin.isoformat() if lapso.fecha_fin else None,
        )

    @classmethod
    def from_dict(cls, datos):
        if not datos:
            return None
        return cls(
            id=datos.get('lapsoID'),
            nombre=datos.get('nombre') or '',
            fecha_inicio=datos.get('fechaInicio'),
            fecha_fin=datos.get('fechaFin'),
        )

    def to_dict(self):
        return {
            'lapsoID': self.id,
            'nombre': self.nombre,
            'fechaInicio': self.fecha_inicio,
            'fechaFin': self.fecha_fin,
        }

    @property
    def inicio(self):
        return fecha_calendario(self.fecha_inicio)

    @property
    def fin(self):
        return fecha_calendario(self.fecha_fin)

    @property
    def anio_escolar(self):
        if self.inicio is None or self.fin is None:
            return ''
        return f"{self.inicio.year}-{self.fin.year}"


@dataclass(frozen=True)
class DocenteSecundario:
    nombre: str
    cedula_prefijo: str = 'V'
    cedula_numero: str = ''

    @classmethod
    def from_dict(cls, datos):
        if not datos or not datos.get('nombre'):
            return None
        return cls(
            nombre=datos['nombre'],
            cedula_prefijo=datos.get('cedulaPrefijo') or 'V',
            cedula_numero=str(datos.get('cedulaNumero') or ''),
        )

    def to_dict(self):
        return {
            'nombre': self.nombre,
            'cedulaPrefijo': self.cedula_prefijo,
            'cedulaNumero': self.cedula_numero,
        }

    @property
    def cedula(self):
        return f"{self.cedula_prefijo}-{self.cedula_numero}" if self.cedula_numero else ''


@dataclass
class BoletaPayload:
    nivel: str = ''
    data: Dict[str, Any] = field(default_factory=dict)
    turno: str = TURNO_POR_DEFECTO
    asistencia: Dict[str, Any] = field(default_factory=dict)
    nombre_colegio: str = ''
    lapso: Optional[LapsoSnapshot] = None
    creado_por: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _CLAVES = ('level', 'data', 'turno', 'attendance', 'schoolName', 'lapso', 'createdBy')

    @classmethod
    def from_dict(cls, datos):
        datos = datos or {}
        return cls(
            nivel=(datos.get('level') or '').strip(),
            data=dict(datos.get('data') or {}),
            turno=datos.get('turno') or TURNO_POR_DEFECTO,
            asistencia=dict(datos.get('attendance') or {}),
            nombre_colegio=datos.get('schoolName') or '',
            lapso=LapsoSnapshot.from_dict(datos.get('lapso')),
            creado_por=datos.get('createdBy'),
            extra={k: v for k, v in datos.items() if k not in cls._CLAVES},
        )

    def to_dict(self):
        datos = dict(self.extra)
        datos.update({
            'level': self.nivel,
            'data': dict(self.data),
            'turno': self.turno,
            'attendance': dict(self.asistencia),
            'schoolName': self.nombre_colegio,
            'lapso': self.lapso.to_dict() if self.lapso else None,
            'createdBy': self.creado_por,
        })
        return datos

    def marcas(self):
        return {k: v for k, v in self.data.items() if es_clave_marca(k)}

    def texto(self, campo):
        valor = self.data.get(campo)
        return '' if valor is None else str(valor)

    @property
    def docente_secundario(self):
        return DocenteSecundario.from_dict(self.data.get(CAMPO_DOCENTE_SECUNDARIO))

    @property
    def dias_habiles(self):
        return self.data.get(CAMPO_DIAS_HABILES)
