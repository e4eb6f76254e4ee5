# apps/boletas/views.py
import json
import logging
from dataclasses import asdict
from functools import wraps

from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from tasks.decorators import role_required
from .exceptions import (
    BoletaPersistenciaError, BoletaValidacionError, PaginacionError, TransicionInvalidaError,
)
from .forms import BoletaForm
from .models import Certificado
from .services.aprobacion import ROLES_REVISORES
from .services.boleta_service import BoletaService

logger = logging.getLogger(__name__)

ROLES_STAFF = ['DOCENTE', 'ADMINISTRADOR', 'COORD_ACADEMICO']


def _datos_peticion(request):
    """Cuerpo JSON o formulario clásico, indistintamente."""
    if request.content_type == 'application/json':
        try:
            datos = json.loads(request.body or b'{}')
        except ValueError:
            raise BoletaValidacionError({'__all__': "El cuerpo de la petición no es JSON válido."})
        if not isinstance(datos, dict):
            raise BoletaValidacionError({'__all__': "El cuerpo de la petición debe ser un objeto."})
        return datos
    return request.POST


def manejar_errores_boleta(view_func):
    """Traduce los errores del subsistema a respuestas JSON."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except BoletaValidacionError as e:
            return JsonResponse({'success': False, 'errors': e.errores}, status=400)
        except TransicionInvalidaError as e:
            return JsonResponse({'success': False, 'error': str(e)}, status=403)
        except BoletaPersistenciaError as e:
            return JsonResponse({'success': False, 'error': str(e)}, status=503)
        except Certificado.DoesNotExist:
            return JsonResponse({'success': False, 'error': 'La boleta no existe.'}, status=404)
        except PaginacionError as e:
            logger.error(f"Formato impreso inconsistente: {e}")
            return JsonResponse({'success': False, 'error': str(e)}, status=500)
    return _wrapped

# ========================================================
#  FORMULARIO Y GUARDADO
# ========================================================

@require_GET
@role_required(ROLES_STAFF)
@manejar_errores_boleta
def preparar_boleta(request, estudiante_id):
    datos = BoletaService().preparar_formulario(estudiante_id, request.GET.get('lapso'))
    return JsonResponse({'success': True, **datos})


@require_POST
@role_required(ROLES_STAFF)
@manejar_errores_boleta
def guardar_boleta(request, certificado_id=None):
    form = BoletaForm(_datos_peticion(request))
    if not form.is_valid():
        raise BoletaValidacionError(form.errores_por_campo())

    resultado = BoletaService().guardar(form.datos_boleta(), request.user, certificado_id)
    return JsonResponse({
        'success': True,
        'id': resultado.certificado.pk,
        'estado': resultado.estado.value,
        'estado_display': resultado.estado.display,
        'creado': resultado.creado,
        'message': 'Boleta guardada' if resultado.creado else 'Boleta actualizada',
    }, status=201 if resultado.creado else 200)


@require_GET
@role_required(ROLES_STAFF)
@manejar_errores_boleta
def cargar_boleta(request, certificado_id):
    return JsonResponse({'success': True, **BoletaService().cargar(certificado_id)})

# ========================================================
#  REVISIÓN
# ========================================================

@require_POST
@role_required(ROLES_REVISORES)
@manejar_errores_boleta
def aprobar_boleta(request, certificado_id):
    certificado = BoletaService().aprobar(certificado_id, request.user)
    return JsonResponse({'success': True, 'id': certificado.pk, 'estado': certificado.estado.value})


@require_POST
@role_required(ROLES_REVISORES)
@manejar_errores_boleta
def rechazar_boleta(request, certificado_id):
    motivo = str(_datos_peticion(request).get('motivo') or '').strip()
    certificado = BoletaService().rechazar(certificado_id, request.user, motivo)
    return JsonResponse({'success': True, 'id': certificado.pk, 'estado': certificado.estado.value})


@require_POST
@role_required(ROLES_REVISORES)
@manejar_errores_boleta
def eliminar_boleta(request, certificado_id):
    BoletaService().eliminar(certificado_id)
    return JsonResponse({'success': True, 'message': 'Boleta eliminada'})

# ========================================================
#  DOCUMENTO IMPRIMIBLE
# ========================================================

@require_GET
@role_required(ROLES_STAFF)
@manejar_errores_boleta
def documento_boleta(request, certificado_id):
    doc = BoletaService().documento(certificado_id)
    return JsonResponse({
        'success': True,
        'estado': doc['estado'].value,
        'nivel': doc['payload'].nivel,
        'identidad': asdict(doc['identidad']),
        'paginas': [asdict(p) for p in doc['paginas']],
    })


@require_GET
@role_required(ROLES_STAFF)
@manejar_errores_boleta
def descargar_boleta_pdf(request, certificado_id):
    """PDF oficial de la boleta (WeasyPrint)."""
    service = BoletaService()
    try:
        pdf_bytes = service.generar_pdf(certificado_id, request)
    except (PaginacionError, Certificado.DoesNotExist, BoletaPersistenciaError):
        raise
    except Exception as e:
        logger.error(f"Error crítico generando la boleta PDF {certificado_id}: {e}", exc_info=True)
        return HttpResponse("Error del servidor generando el documento oficial.", status=500)

    response = HttpResponse(pdf_bytes, content_type='application/pdf')
    filename = f"Boleta_{certificado_id}_{timezone.now().strftime('%Y%m%d')}.pdf"
    response['Content-Disposition'] = f'inline; filename="{filename}"'
    return response
