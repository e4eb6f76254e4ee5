# apps/boletas/services/clasificador.py
"""
Detección del nivel de boleta a partir del nombre visible del salón.

Dos capas, en orden estricto:
1. Etiqueta explícita "[Nivel] resto": autoritativa, se devuelve tal cual.
2. Heurística sobre el nombre normalizado: primero educación inicial,
   luego primaria. Gana la primera regla que coincida.
"""
import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Optional

from . import catalogo

logger = logging.getLogger(__name__)

ORIGEN_ETIQUETA = 'etiqueta'
ORIGEN_HEURISTICA = 'heuristica'

TIPO_EXITO = 'success'
TIPO_ADVERTENCIA = 'warning'

_PATRON_ETIQUETA = re.compile(r'^\s*\[([^\]]+)\]')


@dataclass(frozen=True)
class ReglaNivel:
    nivel: str
    patron: re.Pattern

    def coincide(self, texto):
        return self.patron.search(texto) is not None


@dataclass(frozen=True)
class ClasificacionNivel:
    nivel: Optional[str]
    mensaje: str
    tipo: str
    origen: Optional[str] = None

    @property
    def determinado(self):
        return self.nivel is not None


def _regla(nivel, *alternativas):
    return ReglaNivel(nivel, re.compile('|'.join(alternativas)))


# --- EDUCACIÓN INICIAL (arábigos y romanos) ---
REGLAS_INICIAL = (
    _regla(catalogo.SALA_1,
           r'\b(sala|nivel)\s*(1|i)\b',
           r'\b(primer|primero|1er|1ro|1ero)\s*nivel\b'),
    _regla(catalogo.SALA_2,
           r'\b(sala|nivel)\s*(2|ii)\b',
           r'\b(segundo|2do)\s*nivel\b'),
    _regla(catalogo.SALA_3,
           r'\b(sala|nivel)\s*(3|iii)\b',
           r'\b(tercer|tercero|3er|3ro)\s*nivel\b'),
)

# --- EDUCACIÓN PRIMARIA (ordinal o dígito junto a "grado") ---
# Sin la palabra "grado" no se asume primaria: "1er Año" es bachillerato
_ORDINALES_PRIMARIA = (
    (catalogo.PRIMER_GRADO, 'primer|primero|1er|1ro|1ero', '1'),
    (catalogo.SEGUNDO_GRADO, 'segundo|2do', '2'),
    (catalogo.TERCER_GRADO, 'tercer|tercero|3er|3ro', '3'),
    (catalogo.CUARTO_GRADO, 'cuarto|4to', '4'),
    (catalogo.QUINTO_GRADO, 'quinto|5to', '5'),
    (catalogo.SEXTO_GRADO, 'sexto|6to', '6'),
)

REGLAS_PRIMARIA = tuple(
    _regla(nivel,
           rf'\b({ordinales}|{digito})\s*grado\b',
           rf'\bgrado\s*({digito}|{ordinales})\b')
    for nivel, ordinales, digito in _ORDINALES_PRIMARIA
)

REGLAS = REGLAS_INICIAL + REGLAS_PRIMARIA


def normalizar_nombre(nombre: str) -> str:
    """Minúsculas, sin tildes, sin símbolos de grado y con espacios colapsados."""
    texto = unicodedata.normalize('NFD', nombre.strip().lower())
    texto = ''.join(c for c in texto if unicodedata.category(c) != 'Mn')
    texto = re.sub(r'[°º]', ' ', texto)
    texto = re.sub(r'[_\-./]', ' ', texto)
    return re.sub(r'\s+', ' ', texto).strip()


def nivel_por_etiqueta(nombre: str) -> Optional[str]:
    coincidencia = _PATRON_ETIQUETA.match(nombre)
    return coincidencia.group(1) if coincidencia else None


def nivel_por_heuristica(nombre: str) -> Optional[str]:
    texto = normalizar_nombre(nombre)
    for regla in REGLAS:
        if regla.coincide(texto):
            return regla.nivel
    return None


def clasificar_salon(nombre_salon) -> ClasificacionNivel:
    """Propone el nivel de boleta para el salón indicado (función pura)."""
    if not nombre_salon or not str(nombre_salon).strip():
        return ClasificacionNivel(
            nivel=None,
            mensaje="No se pudo determinar el salón del estudiante. Seleccione el nivel manualmente.",
            tipo=TIPO_ADVERTENCIA,
        )

    nombre_salon = str(nombre_salon)

    nivel = nivel_por_etiqueta(nombre_salon)
    if nivel is not None:
        return ClasificacionNivel(
            nivel=nivel,
            mensaje=f'Estudiante en "{nombre_salon}". Asignada boleta: {nivel}.',
            tipo=TIPO_EXITO,
            origen=ORIGEN_ETIQUETA,
        )

    nivel = nivel_por_heuristica(nombre_salon)
    if nivel is not None:
        logger.info(f"Nivel '{nivel}' inferido del salón '{nombre_salon}' sin etiqueta explícita")
        return ClasificacionNivel(
            nivel=nivel,
            mensaje=f'Estudiante en "{nombre_salon}". Asignada boleta: {nivel}.',
            tipo=TIPO_EXITO,
            origen=ORIGEN_HEURISTICA,
        )

    return ClasificacionNivel(
        nivel=None,
        mensaje=(
            f'El salón "{nombre_salon}" no tiene un nivel automático de inicial o primaria. '
            'Seleccione el nivel manualmente.'
        ),
        tipo=TIPO_ADVERTENCIA,
    )
