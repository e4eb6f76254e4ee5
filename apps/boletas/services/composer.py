# apps/boletas/services/composer.py
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from . import catalogo
from .asistencia import ResumenAsistencia
from .payload import (
    BoletaPayload, DocenteSecundario, LapsoSnapshot, TURNOS, TURNO_POR_DEFECTO,
    CAMPO_ASISTENCIAS_MANUAL, CAMPO_CARACTERISTICAS, CAMPO_DIAS_HABILES,
    CAMPO_DOCENTE_SECUNDARIO, CAMPO_HABITOS, CAMPO_INASISTENCIAS_MANUAL,
    CAMPO_RECOMENDACIONES_DOCENTE, es_clave_marca,
)

logger = logging.getLogger(__name__)

MAX_TEXTO_LIBRE = 250
MAX_TEXTO_MANUAL = 50

# Campos de texto libre propios de cada familia de niveles
CAMPOS_INICIAL = (CAMPO_CARACTERISTICAS,)
CAMPOS_PRIMARIA = (CAMPO_HABITOS, CAMPO_RECOMENDACIONES_DOCENTE)


@dataclass(frozen=True)
class TextosBoleta:
    caracteristicas: str = ''
    actitudes_habitos: str = ''
    recomendaciones_docente: str = ''
    recomendaciones_seccion: Optional[Mapping[int, str]] = None
    docente_secundario: Optional[DocenteSecundario] = None
    asistencias_manual: str = ''
    inasistencias_manual: str = ''


def campos_texto_libre(nivel):
    return CAMPOS_PRIMARIA if catalogo.es_primaria(nivel) else CAMPOS_INICIAL


def _recortar(texto, limite=MAX_TEXTO_LIBRE):
    return (texto or '').strip()[:limite]


def _marcas_validas(nivel, marcas):
    """Solo claves "{s}-{i}" con una opción de la escala del nivel; las vacías se omiten."""
    opciones = set(catalogo.opciones_calificacion(nivel))
    limpias = {}
    for clave, valor in (marcas or {}).items():
        if not es_clave_marca(clave) or not valor:
            continue
        if valor in opciones:
            limpias[clave] = valor
        else:
            logger.info(f"Marca '{valor}' descartada en {clave}: no pertenece a la escala de {nivel}")
    return limpias


def migrar_marcas_legacy(nivel, data):
    """
    Primaria usaba "Sin Evidencias" como cuarta opción; hoy es "Con Ayuda".
    Reescribe las marcas de primaria (idempotente) y deja intactos los demás niveles.
    """
    if not catalogo.es_primaria(nivel):
        return dict(data)

    migrado = dict(data)
    cambios = 0
    for clave, valor in data.items():
        if es_clave_marca(clave) and valor == catalogo.SIN_EVIDENCIAS:
            migrado[clave] = catalogo.CON_AYUDA
            cambios += 1
    if cambios:
        logger.info(f"🔁 {cambios} marca(s) legacy convertidas a '{catalogo.CON_AYUDA}' ({nivel})")
    return migrado


def cargar_para_edicion(payload_dict) -> BoletaPayload:
    """Boleta leída del almacén, lista para editar o reimprimir."""
    payload = BoletaPayload.from_dict(payload_dict)
    payload.data = migrar_marcas_legacy(payload.nivel, payload.data)
    return payload


def componer_boleta(nivel, marcas, textos: TextosBoleta, asistencia: ResumenAsistencia,
                    lapso: LapsoSnapshot, turno, nombre_colegio, editor_id,
                    previo: Optional[BoletaPayload] = None) -> BoletaPayload:
    """
    Arma la boleta completa a partir de lo capturado en el formulario.
    Función pura: no consulta ni guarda nada.
    """
    textos = textos or TextosBoleta()
    data = _marcas_validas(nivel, marcas)

    if catalogo.es_primaria(nivel):
        data[CAMPO_HABITOS] = _recortar(textos.actitudes_habitos)
        data[CAMPO_RECOMENDACIONES_DOCENTE] = _recortar(textos.recomendaciones_docente)
        if textos.docente_secundario and textos.docente_secundario.nombre.strip():
            data[CAMPO_DOCENTE_SECUNDARIO] = textos.docente_secundario.to_dict()
    else:
        data[CAMPO_CARACTERISTICAS] = _recortar(textos.caracteristicas)
        for idx, seccion in enumerate(catalogo.obtener_secciones(nivel)):
            if seccion.tiene_recomendaciones:
                texto = (textos.recomendaciones_seccion or {}).get(idx, '')
                data[catalogo.clave_recomendaciones(idx)] = _recortar(texto)

    if textos.asistencias_manual:
        data[CAMPO_ASISTENCIAS_MANUAL] = _recortar(textos.asistencias_manual, MAX_TEXTO_MANUAL)
    if textos.inasistencias_manual:
        data[CAMPO_INASISTENCIAS_MANUAL] = _recortar(textos.inasistencias_manual, MAX_TEXTO_MANUAL)

    snapshot = asistencia.to_snapshot()
    data[CAMPO_DIAS_HABILES] = snapshot['total']

    creado_por = previo.creado_por if previo and previo.creado_por else editor_id

    return BoletaPayload(
        nivel=nivel,
        data=data,
        turno=turno if turno in TURNOS else TURNO_POR_DEFECTO,
        asistencia=snapshot,
        nombre_colegio=nombre_colegio or '',
        lapso=LapsoSnapshot(lapso.id, lapso.nombre, lapso.fecha_inicio, lapso.fecha_fin),
        creado_por=creado_por,
        extra=dict(previo.extra) if previo else {},
    )
