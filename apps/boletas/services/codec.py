# apps/boletas/services/codec.py
"""
Formato persistido en Certificado.contenido:

    [ETIQUETA DE ESTADO opcional] + JSON de la boleta

Sin etiqueta la boleta está pendiente. Solo se reconoce una etiqueta y
solo al inicio del texto.
"""
import enum
import json
import logging

logger = logging.getLogger(__name__)

ETIQUETA_CONFIRMADA = '[BOLETA_CONFIRMADA]'
ETIQUETA_RECHAZADA = '[BOLETA_RECHAZADA]'


class EstadoBoleta(str, enum.Enum):
    PENDIENTE = 'PENDING'
    CONFIRMADA = 'CONFIRMED'
    RECHAZADA = 'REJECTED'

    @property
    def etiqueta(self):
        return _ETIQUETAS.get(self, '')

    @property
    def display(self):
        return _DISPLAY[self]


_ETIQUETAS = {
    EstadoBoleta.CONFIRMADA: ETIQUETA_CONFIRMADA,
    EstadoBoleta.RECHAZADA: ETIQUETA_RECHAZADA,
}

_DISPLAY = {
    EstadoBoleta.PENDIENTE: 'Pendiente',
    EstadoBoleta.CONFIRMADA: 'Aprobada',
    EstadoBoleta.RECHAZADA: 'Rechazada',
}


def separar_estado(contenido):
    """Retorna (estado, resto) quitando como máximo una etiqueta inicial."""
    contenido = contenido or ''
    if contenido.startswith(ETIQUETA_CONFIRMADA):
        return EstadoBoleta.CONFIRMADA, contenido[len(ETIQUETA_CONFIRMADA):]
    if contenido.startswith(ETIQUETA_RECHAZADA):
        return EstadoBoleta.RECHAZADA, contenido[len(ETIQUETA_RECHAZADA):]
    return EstadoBoleta.PENDIENTE, contenido


def estado_de(contenido):
    return separar_estado(contenido)[0]


def decodificar(contenido):
    """
    (estado, payload) a partir del texto guardado.
    Un JSON dañado produce un payload vacío y una advertencia en el log.
    """
    estado, texto = separar_estado(contenido)
    texto = texto.strip()
    if not texto:
        return estado, {}

    try:
        payload = json.loads(texto)
    except ValueError as e:
        logger.warning(f"⚠️ Contenido de boleta ilegible, se continúa con rúbrica vacía: {e}")
        return estado, {}

    if not isinstance(payload, dict):
        logger.warning(f"⚠️ Contenido de boleta no es un objeto JSON ({type(payload).__name__}); se ignora")
        return estado, {}
    return estado, payload


def codificar(estado, payload):
    estado = EstadoBoleta(estado)
    return f"{estado.etiqueta}{json.dumps(payload, ensure_ascii=False)}"


def reetiquetar(contenido, estado):
    """Cambia la etiqueta sin volver a serializar el JSON guardado."""
    _, resto = separar_estado(contenido)
    return f"{EstadoBoleta(estado).etiqueta}{resto.strip()}"
