# apps/boletas/services/boleta_service.py
import logging
from dataclasses import dataclass
from typing import Any, Dict

from django.conf import settings
from django.template.loader import render_to_string
from django.urls import reverse
from django.utils import timezone
from django.utils.text import slugify

from weasyprint import HTML

from apps.academics.models import Lapso
from apps.academics.services import academic_logic
from . import catalogo
from .almacen import AlmacenCertificados
from .aprobacion import (
    es_revisor, estado_al_aprobar, estado_al_guardar, estado_al_rechazar,
    notificar_creador, notificar_revisores,
)
from .asistencia import prefijar_dias_habiles, resolver_asistencia
from .clasificador import clasificar_salon
from .codec import EstadoBoleta, codificar, decodificar, reetiquetar
from .composer import TextosBoleta, cargar_para_edicion, componer_boleta
from .datos_complementarios import identidad_para_boleta
from .paginador import Firmante, Membrete, paginar_boleta
from .payload import CAMPO_DIAS_HABILES, LapsoSnapshot
from ..exceptions import BoletaValidacionError
from ..models import TIPO_BOLETA

logger = logging.getLogger(__name__)

AGREGADO_VACIO = {'present': 0, 'late': 0, 'absent': 0, 'justifiedAbsent': 0}


@dataclass
class ResultadoGuardado:
    certificado: Any
    estado: EstadoBoleta
    payload: Any
    creado: bool
    notificados: int = 0


def enlace_boleta(certificado_id):
    """Enlace directo al registro, resaltado en la bandeja de revisión."""
    return f"{reverse('boletas:cargar', args=[certificado_id])}?highlight={certificado_id}"


def secciones_para_editor(nivel):
    return [
        {
            'indice': idx,
            'titulo': seccion.titulo,
            'tiene_recomendaciones': seccion.tiene_recomendaciones,
            'indicadores': [
                {'clave': catalogo.clave_marca(idx, i), 'texto': texto}
                for i, texto in enumerate(seccion.indicadores)
            ],
        }
        for idx, seccion in enumerate(catalogo.obtener_secciones(nivel))
    ]


class BoletaService:
    """
    SERVICIO DE BOLETAS DESCRIPTIVAS

    Responsabilidades:
    1. Preparar el formulario (nivel sugerido, asistencia, días hábiles).
    2. Guardar boletas (componer, decidir estado, codificar, avisar revisores).
    3. Aprobar / rechazar.
    4. Reconstruir el documento paginado y el PDF oficial con WeasyPrint.
    """

    TEMPLATE_PDF = 'boletas/boleta_pdf.html'

    def __init__(self, almacen=None, max_workers=None):
        self.almacen = almacen or AlmacenCertificados()
        self.max_workers = max_workers

    # ---------------------------------------------------------
    # CONSULTAS AUXILIARES (cada una degrada por su cuenta)
    # ---------------------------------------------------------

    def _nombre_salon(self, estudiante_id):
        try:
            return academic_logic.nombre_salon_de_estudiante(estudiante_id)
        except Exception as e:
            logger.warning(f"No se pudo obtener el salón del estudiante {estudiante_id}: {e}")
            return None

    def _agregado_asistencia(self, estudiante_id, lapso_id):
        try:
            return academic_logic.obtener_asistencia(estudiante_id, lapso_id)
        except Exception as e:
            logger.warning(f"Asistencia no disponible para {estudiante_id} (lapso {lapso_id}): {e}")
            return None

    def _nombre_estudiante(self, estudiante_id):
        try:
            return academic_logic.nombre_usuario(estudiante_id)
        except Exception:
            return 'Estudiante'

    def _nombre_colegio(self, tenant):
        if tenant is not None:
            return tenant.nombre_impreso
        return getattr(settings, 'SCHOOL_NAME', '')

    # ---------------------------------------------------------
    # 1. PREPARACIÓN DEL FORMULARIO
    # ---------------------------------------------------------

    def preparar_formulario(self, estudiante_id, lapso_id=None) -> Dict[str, Any]:
        lapsos = list(Lapso.objects.filter(activo=True).order_by('fecha_inicio'))
        lapso = None
        if lapso_id and str(lapso_id).strip().isdigit():
            lapso = next((l for l in lapsos if l.pk == int(lapso_id)), None)
        elif lapso_id:
            logger.warning(f"Lapso no numérico ('{lapso_id}'); se usa el lapso en curso")
        if lapso is None:
            lapso = academic_logic.lapso_actual(lapsos) or (lapsos[0] if lapsos else None)

        clasificacion = clasificar_salon(self._nombre_salon(estudiante_id))
        agregado = self._agregado_asistencia(estudiante_id, lapso.pk if lapso else None) or dict(AGREGADO_VACIO)
        dias_habiles = prefijar_dias_habiles(
            None,
            lapso.fecha_inicio if lapso else None,
            lapso.fecha_fin if lapso else None,
        )
        nivel = clasificacion.nivel
        return {
            'nivel': nivel,
            'nivel_origen': clasificacion.origen,
            'mensaje': clasificacion.mensaje,
            'tipo_mensaje': clasificacion.tipo,
            'lapso_id': lapso.pk if lapso else None,
            'lapsos': [{'id': l.pk, 'nombre': l.nombre} for l in lapsos],
            'asistencia': agregado,
            'dias_habiles': dias_habiles,
            'opciones': list(catalogo.opciones_calificacion(nivel)) if nivel else [],
            'secciones': secciones_para_editor(nivel),
            'leyenda': catalogo.LEYENDA_OPCIONES,
        }

    # ---------------------------------------------------------
    # 2. GUARDADO (crear o actualizar)
    # ---------------------------------------------------------

    def _validar(self, datos):
        errores = {}
        nivel = datos.get('nivel')
        if not nivel:
            errores['nivel'] = "No se puede generar la boleta: El estudiante no pertenece a un Nivel válido."
        elif not catalogo.nivel_valido(nivel):
            errores['nivel'] = f"El nivel '{nivel}' no tiene rúbrica de indicadores."
        if not datos.get('lapso'):
            errores['lapso'] = "Debe seleccionar un lapso."
        if not datos.get('estudiante_id'):
            errores['usuario'] = "Debe seleccionar un estudiante."
        if errores:
            raise BoletaValidacionError(errores)

    def guardar(self, datos: Dict[str, Any], editor, certificado_id=None) -> ResultadoGuardado:
        self._validar(datos)

        nivel = datos['nivel']
        lapso = datos['lapso']
        estudiante_id = datos['estudiante_id']

        previo = None
        estado_previo = None
        tenant = None
        if certificado_id:
            actual = self.almacen.obtener(certificado_id)
            tenant = actual.tenant
            estado_previo, payload_previo = decodificar(actual.contenido)
            previo = cargar_para_edicion(payload_previo)
        else:
            perfil = getattr(editor, 'perfil', None)
            tenant = getattr(perfil, 'tenant', None)

        # El lapso guardado es una copia: si no cambia, se conserva la original
        if previo is not None and previo.lapso is not None and previo.lapso.id == lapso.pk:
            snapshot_lapso = previo.lapso
        else:
            snapshot_lapso = LapsoSnapshot.desde_lapso(lapso)

        agregado = self._agregado_asistencia(estudiante_id, lapso.pk)
        if agregado is None:
            agregado = previo.asistencia if previo is not None else dict(AGREGADO_VACIO)
        asistencia = resolver_asistencia(agregado, datos.get('dias_habiles'))

        textos = TextosBoleta(
            caracteristicas=datos.get('caracteristicas', ''),
            actitudes_habitos=datos.get('actitudes_habitos', ''),
            recomendaciones_docente=datos.get('recomendaciones_docente', ''),
            recomendaciones_seccion=datos.get('recomendaciones') or {},
            docente_secundario=datos.get('docente_secundario'),
            asistencias_manual=datos.get('asistencias_manual', ''),
            inasistencias_manual=datos.get('inasistencias_manual', ''),
        )

        payload = componer_boleta(
            nivel=nivel,
            marcas=datos.get('marcas') or {},
            textos=textos,
            asistencia=asistencia,
            lapso=snapshot_lapso,
            turno=datos.get('turno'),
            nombre_colegio=(previo.nombre_colegio if previo and previo.nombre_colegio else self._nombre_colegio(tenant)),
            editor_id=editor.pk,
            previo=previo,
        )

        transicion = estado_al_guardar(es_revisor(editor), estado_previo)
        registro = {
            'usuario_id': estudiante_id,
            'tipo': TIPO_BOLETA,
            'firmante_nombre': datos.get('firmante_nombre') or editor.get_full_name() or editor.username,
            'firmante_cargo': datos.get('firmante_cargo', ''),
            'contenido': codificar(transicion.estado, payload.to_dict()),
            'fecha_emision': timezone.now(),
            'tenant': tenant,
        }

        if certificado_id:
            certificado = self.almacen.actualizar(certificado_id, registro)
        else:
            certificado = self.almacen.crear(registro)

        notificados = 0
        if transicion.notificar_revisores:
            notificados = notificar_revisores(
                certificado.pk,
                editor.get_full_name() or editor.username,
                self._nombre_estudiante(estudiante_id),
                nivel,
                enlace_boleta(certificado.pk),
                tenant=tenant,
            )

        logger.info(
            f"Boleta {certificado.pk} guardada por {editor.username}: {nivel} / {snapshot_lapso.nombre} "
            f"-> {transicion.estado.value}"
        )
        return ResultadoGuardado(
            certificado=certificado,
            estado=transicion.estado,
            payload=payload,
            creado=not certificado_id,
            notificados=notificados,
        )

    # ---------------------------------------------------------
    # 3. LECTURA PARA EDICIÓN
    # ---------------------------------------------------------

    def cargar(self, certificado_id) -> Dict[str, Any]:
        certificado = self.almacen.obtener(certificado_id)
        estado, payload_dict = decodificar(certificado.contenido)
        payload = cargar_para_edicion(payload_dict)

        lapso = payload.lapso
        if lapso is not None:
            payload.data[CAMPO_DIAS_HABILES] = prefijar_dias_habiles(
                payload.data.get(CAMPO_DIAS_HABILES) or payload.asistencia.get('total'),
                lapso.inicio,
                lapso.fin,
            )

        return {
            'id': certificado.pk,
            'estudiante_id': certificado.usuario_id,
            'estado': estado.value,
            'estado_display': estado.display,
            'firmante_nombre': certificado.firmante_nombre,
            'firmante_cargo': certificado.firmante_cargo,
            'payload': payload.to_dict(),
            'creado_por': payload.creado_por or certificado.usuario_id,
            'opciones': list(catalogo.opciones_calificacion(payload.nivel)) if payload.nivel else [],
            'secciones': secciones_para_editor(payload.nivel),
        }

    # ---------------------------------------------------------
    # 4. REVISIÓN
    # ---------------------------------------------------------

    def _revisar(self, certificado_id, revisor, transicion, motivo=''):
        certificado = self.almacen.obtener(certificado_id)
        _, payload_dict = decodificar(certificado.contenido)
        registro = {
            'contenido': reetiquetar(certificado.contenido, transicion.estado),
            'fecha_emision': certificado.fecha_emision,
        }
        certificado = self.almacen.actualizar(certificado_id, registro)

        notificar_creador(
            payload_dict.get('createdBy'),
            revisor,
            certificado_id,
            self._nombre_estudiante(certificado.usuario_id),
            transicion.estado,
            enlace_boleta(certificado_id),
            motivo=motivo,
        )
        logger.info(f"Boleta {certificado_id} -> {transicion.estado.value} por {revisor.username}")
        return certificado

    def aprobar(self, certificado_id, revisor):
        return self._revisar(certificado_id, revisor, estado_al_aprobar(es_revisor(revisor)))

    def rechazar(self, certificado_id, revisor, motivo=''):
        return self._revisar(certificado_id, revisor, estado_al_rechazar(es_revisor(revisor)), motivo)

    def eliminar(self, certificado_id):
        self.almacen.eliminar(certificado_id)
        logger.info(f"Boleta {certificado_id} eliminada")

    # ---------------------------------------------------------
    # 5. DOCUMENTO IMPRIMIBLE
    # ---------------------------------------------------------

    def documento(self, certificado_id) -> Dict[str, Any]:
        certificado = self.almacen.obtener(certificado_id)
        estado, payload_dict = decodificar(certificado.contenido)
        payload = cargar_para_edicion(payload_dict)

        identidad = identidad_para_boleta(certificado.usuario_id, payload.nivel, self.max_workers)
        paginas = paginar_boleta(
            payload,
            identidad=identidad,
            membrete=Membrete.desde_tenant(certificado.tenant),
            firmante=Firmante(certificado.firmante_nombre, certificado.firmante_cargo),
        )
        return {
            'certificado': certificado,
            'estado': estado,
            'payload': payload,
            'identidad': identidad,
            'paginas': paginas,
        }

    def generar_pdf(self, certificado_id, request) -> bytes:
        doc = self.documento(certificado_id)
        context = {
            'paginas': doc['paginas'],
            'payload': doc['payload'],
            'estado': doc['estado'],
            'es_primaria': catalogo.es_primaria(doc['payload'].nivel),
            'fecha_impresion': timezone.now(),
            'metadata': self._metadata_pdf(doc),
        }
        html_string = render_to_string(self.TEMPLATE_PDF, context, request=request)
        try:
            html = HTML(string=html_string, base_url=request.build_absolute_uri('/'))
            return html.write_pdf()
        except Exception as e:
            logger.critical(f"🔥 Fallo generando PDF de la boleta {certificado_id}: {e}", exc_info=True)
            raise

    def _metadata_pdf(self, doc):
        """Título, autor y palabras clave que WeasyPrint toma de las etiquetas <meta>."""
        payload = doc['payload']
        estudiante = doc['identidad'].estudiante
        return {
            'title': f"Boleta {payload.nivel} - {estudiante}",
            'autor': payload.nombre_colegio or getattr(settings, 'SCHOOL_NAME', ''),
            'keywords': ', '.join(['boleta', slugify(estudiante), slugify(payload.nivel)]),
        }
