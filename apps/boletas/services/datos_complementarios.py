# apps/boletas/services/datos_complementarios.py
"""
Consultas de identidad que solo sirven para imprimir (estudiante, cédula,
docente, representante).

Cada consulta es independiente: se lanzan en paralelo, y si una falla se
reemplaza por "N/A" sin afectar a las demás. Una consulta cancelada
descarta los resultados que lleguen después.
"""
import contextvars
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict

from django.conf import settings
from django.db import connection

from apps.academics.services import academic_logic
from . import catalogo
from .paginador import IdentidadBoleta, SIN_DATO

logger = logging.getLogger(__name__)

MAX_WORKERS = getattr(settings, 'BOLETAS_CONSULTAS_PARALELAS', 4)


class ConsultaComplementaria:
    """
    Lote de consultas con marcador por fallo.

    La cancelación la decide quien creó el lote (por ejemplo, un hilo que
    atiende una petición abandonada): basta con llamar a cancelar() y los
    resultados posteriores se descartan.
    """

    def __init__(self, consultas: Dict[str, Callable[[], object]], max_workers=None,
                 marcador=SIN_DATO):
        self.consultas = dict(consultas)
        self.max_workers = max_workers if max_workers is not None else MAX_WORKERS
        self.marcador = marcador
        self._cancelada = threading.Event()
        self._resultados = {clave: marcador for clave in self.consultas}

    @property
    def cancelada(self):
        return self._cancelada.is_set()

    def cancelar(self):
        self._cancelada.set()

    def _ejecutar(self, clave, consulta, en_hilo):
        try:
            valor = consulta()
        except Exception as e:
            logger.warning(f"Consulta '{clave}' falló, se usa '{self.marcador}': {e}")
            return self.marcador
        finally:
            if en_hilo:
                # Cada hilo abre su propia conexión; se libera al terminar
                connection.close()
        if valor is None or valor == '':
            return self.marcador
        return valor

    def _aplicar(self, clave, valor):
        if self.cancelada:
            logger.info(f"Resultado de '{clave}' descartado: consulta cancelada")
            return
        self._resultados[clave] = valor

    def resolver(self):
        """Ejecuta todas las consultas y retorna {clave: valor o marcador}."""
        if self.cancelada or not self.consultas:
            return dict(self._resultados)

        if self.max_workers <= 1:
            for clave, consulta in self.consultas.items():
                self._aplicar(clave, self._ejecutar(clave, consulta, en_hilo=False))
            return dict(self._resultados)

        workers = min(self.max_workers, len(self.consultas))
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futures = {
                # Cada hilo hereda el colegio activo de la petición
                ex.submit(contextvars.copy_context().run, self._ejecutar, clave, consulta, True): clave
                for clave, consulta in self.consultas.items()
            }
            for fut in as_completed(futures):
                self._aplicar(futures[fut], fut.result())
        return dict(self._resultados)


def consultas_identidad(estudiante_id, nivel):
    """Consultas de plantilla que necesita el formato impreso del nivel."""
    consultas = {
        'estudiante': lambda: academic_logic.nombre_usuario(estudiante_id),
    }
    if catalogo.es_primaria(nivel):
        consultas.update({
            'cedula': lambda: academic_logic.documento_usuario(estudiante_id),
            'docente': lambda: academic_logic.nombre_docente_de_estudiante(estudiante_id),
            'representante': lambda: academic_logic.representante_de(estudiante_id),
        })
    return consultas


def identidad_para_boleta(estudiante_id, nivel, max_workers=None):
    resultados = ConsultaComplementaria(consultas_identidad(estudiante_id, nivel), max_workers).resolver()
    return IdentidadBoleta(**resultados)
