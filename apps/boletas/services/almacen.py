# apps/boletas/services/almacen.py
import logging

from django.db import DatabaseError, transaction

from ..exceptions import BoletaPersistenciaError
from ..models import Certificado

logger = logging.getLogger(__name__)

CAMPOS_REGISTRO = ('usuario_id', 'tipo', 'firmante_nombre', 'firmante_cargo', 'contenido', 'fecha_emision', 'tenant')


class AlmacenCertificados:
    """
    Contrato crear / actualizar / obtener sobre el modelo Certificado.
    Los errores de base de datos se traducen a BoletaPersistenciaError.
    """
    MENSAJE_FALLO = "No se pudo guardar la boleta. Verifique la conexión o intente nuevamente."

    def obtener(self, certificado_id) -> Certificado:
        try:
            return Certificado.objects.select_related('usuario', 'tenant').get(pk=certificado_id)
        except DatabaseError as e:
            logger.error(f"Almacén de certificados no disponible leyendo {certificado_id}: {e}")
            raise BoletaPersistenciaError("No se pudo cargar la boleta para editar.") from e

    def crear(self, registro) -> Certificado:
        datos = {k: v for k, v in registro.items() if k in CAMPOS_REGISTRO}
        try:
            with transaction.atomic():
                return Certificado.objects.create(**datos)
        except DatabaseError as e:
            logger.error(f"Fallo creando certificado: {e}", exc_info=True)
            raise BoletaPersistenciaError(self.MENSAJE_FALLO) from e

    def actualizar(self, certificado_id, registro) -> Certificado:
        datos = {k: v for k, v in registro.items() if k in CAMPOS_REGISTRO and k != 'tenant'}
        try:
            with transaction.atomic():
                actualizados = Certificado.objects.filter(pk=certificado_id).update(**datos)
        except DatabaseError as e:
            logger.error(f"Fallo actualizando certificado {certificado_id}: {e}", exc_info=True)
            raise BoletaPersistenciaError(self.MENSAJE_FALLO) from e
        if not actualizados:
            raise Certificado.DoesNotExist(f"Certificado {certificado_id} no existe.")
        return self.obtener(certificado_id)

    def eliminar(self, certificado_id):
        try:
            Certificado.objects.filter(pk=certificado_id).delete()
        except DatabaseError as e:
            logger.error(f"Fallo eliminando certificado {certificado_id}: {e}", exc_info=True)
            raise BoletaPersistenciaError("Error al eliminar la boleta.") from e
