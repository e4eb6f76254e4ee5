# apps/boletas/services/paginador.py
"""
Compone las páginas impresas de una boleta.

Contrato de formato (no heurístico):
* Educación inicial: siempre 2 páginas; el catálogo debe tener 2 secciones.
* Primaria: siempre 1 página con todas las secciones en orden de catálogo.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from django.conf import settings

from . import catalogo
from .asistencia import ResumenAsistencia
from .payload import (
    BoletaPayload, CAMPO_ASISTENCIAS_MANUAL, CAMPO_CARACTERISTICAS,
    CAMPO_HABITOS, CAMPO_INASISTENCIAS_MANUAL, CAMPO_RECOMENDACIONES_DOCENTE,
)
from ..exceptions import PaginacionError

logger = logging.getLogger(__name__)

SECCIONES_INICIAL = 2
PAGINAS_INICIAL = 2
PAGINAS_PRIMARIA = 1
MARCA = 'X'
SIN_DATO = 'N/A'

# --- TIPOS DE BLOQUE ---
ENCABEZADO = 'encabezado'
INFO_ESTUDIANTE = 'info_estudiante'
DATOS_PRIMARIA = 'datos_primaria'
RESUMEN_ASISTENCIA = 'resumen_asistencia'
SECCION = 'seccion'
TEXTO_LIBRE = 'texto_libre'
LEYENDA = 'leyenda'
DOCENTE_SECUNDARIO = 'docente_secundario'
FIRMAS = 'firmas'


@dataclass(frozen=True)
class Membrete:
    republica: str = 'República Bolivariana de Venezuela'
    ministerio: str = 'Ministerio del Poder Popular para la Educación'
    nombre_complejo: str = ''
    municipio: str = ''
    codigo_dea: str = ''

    @classmethod
    def por_defecto(cls):
        config = {
            k: v for k, v in getattr(settings, 'BOLETAS_MEMBRETE', {}).items()
            if k in cls.__dataclass_fields__
        }
        config.setdefault('nombre_complejo', getattr(settings, 'SCHOOL_NAME', ''))
        return cls(**config)

    @classmethod
    def desde_tenant(cls, tenant):
        base = cls.por_defecto()
        if tenant is None:
            return base
        return cls(
            republica=base.republica,
            ministerio=base.ministerio,
            nombre_complejo=tenant.nombre_impreso or base.nombre_complejo,
            municipio=tenant.municipio or base.municipio,
            codigo_dea=tenant.codigo_dea or base.codigo_dea,
        )


@dataclass(frozen=True)
class IdentidadBoleta:
    estudiante: str = SIN_DATO
    cedula: str = SIN_DATO
    docente: str = SIN_DATO
    representante: str = SIN_DATO


@dataclass(frozen=True)
class Firmante:
    nombre: str = ''
    cargo: str = ''


@dataclass(frozen=True)
class Bloque:
    tipo: str
    datos: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Pagina:
    numero: int
    total: int
    bloques: List[Bloque] = field(default_factory=list)

    def bloques_de(self, tipo):
        return [b for b in self.bloques if b.tipo == tipo]

    @property
    def secciones(self):
        return [b.datos for b in self.bloques_de(SECCION)]

# ===================================================================
# CONSTRUCCIÓN DE BLOQUES
# ===================================================================

def _tabla_seccion(indice, seccion, marcas, columnas):
    """
    Tabla de una sección. `columnas` es una lista de (encabezado, opción);
    una opción None deja la columna siempre vacía.
    """
    filas = []
    for idx_ind, texto in enumerate(seccion.indicadores):
        valor = marcas.get(catalogo.clave_marca(indice, idx_ind))
        celdas = [MARCA if opcion is not None and valor == opcion else '' for _, opcion in columnas]
        filas.append({'texto': texto, 'celdas': celdas})
    return Bloque(SECCION, {
        'indice': indice,
        'titulo': seccion.titulo,
        'columnas': [encabezado for encabezado, _ in columnas],
        'filas': filas,
    })


def _encabezado(payload, membrete):
    return Bloque(ENCABEZADO, {
        'republica': membrete.republica,
        'ministerio': membrete.ministerio,
        'colegio': payload.nombre_colegio or membrete.nombre_complejo,
        'municipio': membrete.municipio,
        'codigo_dea': membrete.codigo_dea,
    })


def _conteos_visibles(payload, resumen):
    """Los textos manuales solo reemplazan lo que se muestra, nunca los cálculos."""
    asistencias = payload.texto(CAMPO_ASISTENCIAS_MANUAL) or str(resumen.asistidos)
    inasistencias = payload.texto(CAMPO_INASISTENCIAS_MANUAL) or str(resumen.inasistidos)
    return asistencias, inasistencias


def _formatear_fecha(fecha):
    return f"{fecha.day}/{fecha.month}/{fecha.year}" if fecha else ''


def _titulo_lapso(payload, por_defecto):
    lapso = payload.lapso
    nombre = (lapso.nombre if lapso else '') or por_defecto
    anio = lapso.anio_escolar if lapso else ''
    return nombre, anio


def _firmas(representante_label, nombre, cargo):
    return Bloque(FIRMAS, {
        'firmas': [
            {'nombre': '', 'cargo': representante_label},
            {'nombre': nombre, 'cargo': cargo},
        ]
    })

# ===================================================================
# FORMATOS
# ===================================================================

def _paginas_inicial(payload, identidad, membrete, firmante):
    secciones = catalogo.obtener_secciones(payload.nivel)
    if len(secciones) != SECCIONES_INICIAL:
        raise PaginacionError(
            f"El formato de educación inicial espera {SECCIONES_INICIAL} secciones y "
            f"'{payload.nivel}' tiene {len(secciones)}."
        )

    marcas = payload.marcas()
    columnas = [(op, op) for op in catalogo.opciones_calificacion(payload.nivel)]
    resumen = ResumenAsistencia.from_snapshot(payload.asistencia)
    asistencias, inasistencias = _conteos_visibles(payload, resumen)
    nombre_lapso, anio = _titulo_lapso(payload, 'I LAPSO')

    info = Bloque(INFO_ESTUDIANTE, {
        'titulo': 'BOLETIN DESCRIPTIVO EDUCACIÓN INICIAL:',
        'lapso': f"{nombre_lapso} {anio}".strip(),
        'nivel': payload.nivel,
        'estudiante': identidad.estudiante,
        'dias_asistente': asistencias,
        'dias_inasistente': inasistencias,
        'turno': payload.turno,
        'dias_habiles': resumen.total,
        'porcentaje_asistencia': resumen.porcentaje_asistencia(),
        'porcentaje_inasistencia': resumen.porcentaje_inasistencia(),
    })

    pagina_1 = Pagina(1, PAGINAS_INICIAL, [
        _encabezado(payload, membrete),
        info,
        _tabla_seccion(0, secciones[0], marcas, columnas),
        Bloque(TEXTO_LIBRE, {
            'titulo': 'Características de la actuación escolar:',
            'texto': payload.texto(CAMPO_CARACTERISTICAS),
        }),
        Bloque(LEYENDA, {
            'opciones': [
                {'opcion': op, 'significado': catalogo.LEYENDA_OPCIONES[op]}
                for op in catalogo.opciones_calificacion(payload.nivel)
            ]
        }),
    ])

    bloques_2 = [_tabla_seccion(1, secciones[1], marcas, columnas)]
    for idx, seccion in enumerate(secciones):
        if seccion.tiene_recomendaciones:
            bloques_2.append(Bloque(TEXTO_LIBRE, {
                'titulo': 'Recomendaciones:',
                'texto': payload.texto(catalogo.clave_recomendaciones(idx)),
            }))
    bloques_2.append(_firmas('Representante', firmante.nombre, firmante.cargo or 'Docente'))

    return [pagina_1, Pagina(2, PAGINAS_INICIAL, bloques_2)]


def _paginas_primaria(payload, identidad, membrete, firmante):
    secciones = catalogo.obtener_secciones(payload.nivel)
    marcas = payload.marcas()
    resumen = ResumenAsistencia.from_snapshot(payload.asistencia)
    asistencias, inasistencias = _conteos_visibles(payload, resumen)
    nombre_lapso, anio = _titulo_lapso(payload, 'PRIMER MOMENTO')
    lapso = payload.lapso

    bloques = [
        _encabezado(payload, membrete),
        Bloque(DATOS_PRIMARIA, {
            'titulo': 'INSTRUMENTO DE EVALUACIÓN DE EDUCACIÓN PRIMARIA',
            'nivel': payload.nivel.upper(),
            'lapso': f"{nombre_lapso} AÑO ESCOLAR {anio}".strip(),
            'estudiante': identidad.estudiante,
            'cedula': identidad.cedula,
            'docente': identidad.docente,
            'representante': identidad.representante,
            'inicio': _formatear_fecha(lapso.inicio) if lapso else '',
            'culminacion': _formatear_fecha(lapso.fin) if lapso else '',
        }),
        Bloque(RESUMEN_ASISTENCIA, {
            'dias_habiles': resumen.total,
            'asistencias': asistencias,
            'inasistencias': inasistencias,
        }),
    ]
    bloques.extend(
        _tabla_seccion(idx, seccion, marcas, catalogo.COLUMNAS_IMPRESION_PRIMARIA)
        for idx, seccion in enumerate(secciones)
    )
    bloques.append(Bloque(TEXTO_LIBRE, {
        'titulo': 'Actitudes, Hábitos de Trabajo:',
        'texto': payload.texto(CAMPO_HABITOS),
    }))
    bloques.append(Bloque(TEXTO_LIBRE, {
        'titulo': 'Recomendaciones:',
        'texto': payload.texto(CAMPO_RECOMENDACIONES_DOCENTE),
    }))

    secundario = payload.docente_secundario
    if secundario is not None:
        bloques.append(Bloque(DOCENTE_SECUNDARIO, {
            'nombre': secundario.nombre,
            'cedula': secundario.cedula,
        }))

    bloques.append(_firmas('Representante', identidad.docente, 'Docente'))
    return [Pagina(1, PAGINAS_PRIMARIA, bloques)]


def paginar_boleta(payload: BoletaPayload, identidad: Optional[IdentidadBoleta] = None,
                   membrete: Optional[Membrete] = None,
                   firmante: Optional[Firmante] = None) -> List[Pagina]:
    """Páginas de la boleta según la familia del nivel."""
    identidad = identidad or IdentidadBoleta()
    membrete = membrete or Membrete.por_defecto()
    firmante = firmante or Firmante()

    if not catalogo.nivel_valido(payload.nivel):
        raise PaginacionError(f"El nivel '{payload.nivel}' no tiene rúbrica ni formato impreso.")

    if catalogo.es_primaria(payload.nivel):
        return _paginas_primaria(payload, identidad, membrete, firmante)
    return _paginas_inicial(payload, identidad, membrete, firmante)
