import json
from unittest.mock import patch

import pytest
from django.urls import reverse

from apps.boletas.exceptions import BoletaPersistenciaError
from apps.boletas.models import Certificado
from apps.boletas.services.codec import EstadoBoleta, codificar
from apps.tenancy.models import Tenant
from tasks.models import Perfil

NOTIFICADOR = 'apps.boletas.services.aprobacion.notificar_rol'


def _post_json(client, url, body):
    return client.post(url, data=json.dumps(body), content_type='application/json')


def _cuerpo(estudiante, lapso, **extra):
    cuerpo = {
        'usuario': estudiante.pk,
        'lapso': lapso.pk,
        'nivel': 'Sala 1',
        'turno': 'Tarde',
        'marcas': {'0-0': 'Consolidado', '1-1': 'Sin Evidencias'},
        'recomendaciones': {'1': 'Leer cuentos'},
        'caracteristicas': 'Alegre y participativa',
        'firmante_cargo': 'Docente de aula',
    }
    cuerpo.update(extra)
    return cuerpo


@pytest.fixture
def boleta(estudiante, docente, lapso, tenant):
    payload = {
        'level': 'Primer Grado',
        'data': {'0-0': 'Consolidado'},
        'attendance': {'present': 3, 'late': 0, 'absent': 1, 'justifiedAbsent': 0, 'total': 4},
        'lapso': {'lapsoID': lapso.pk, 'nombre': lapso.nombre, 'fechaInicio': '2024-09-16', 'fechaFin': '2024-12-13'},
        'createdBy': docente.pk,
    }
    return Certificado.objects.create(
        tenant=tenant, usuario=estudiante, contenido=codificar(EstadoBoleta.PENDIENTE, payload),
        firmante_nombre='Luis Gómez', firmante_cargo='Docente',
    )


# --- Acceso ---

def test_anonimo_redirige_al_login(client, estudiante):
    respuesta = client.get(reverse('boletas:preparar', args=[estudiante.pk]))
    assert respuesta.status_code == 302


def test_estudiante_no_tiene_acceso(client, estudiante):
    client.force_login(estudiante)
    respuesta = client.get(reverse('boletas:preparar', args=[estudiante.pk]))
    assert respuesta.status_code == 403
    assert respuesta.json()['success'] is False


def test_guardar_solo_por_post(cliente_docente):
    assert cliente_docente.get(reverse('boletas:crear')).status_code == 405

# --- Formulario y guardado ---

def test_preparar(cliente_docente, estudiante, salon_inicial, lapso):
    respuesta = cliente_docente.get(reverse('boletas:preparar', args=[estudiante.pk]), {'lapso': lapso.pk})
    assert respuesta.status_code == 200
    datos = respuesta.json()
    assert datos['nivel'] == 'Sala 2'
    assert datos['dias_habiles'] == 65
    assert datos['opciones'][3] == 'Sin Evidencias'


def test_preparar_con_lapso_no_numerico(cliente_docente, estudiante, salon_inicial, lapso):
    respuesta = cliente_docente.get(reverse('boletas:preparar', args=[estudiante.pk]), {'lapso': 'abc'})
    assert respuesta.status_code == 200
    assert respuesta.json()['lapso_id'] == lapso.pk
    assert respuesta.json()['dias_habiles'] == 65


def test_docente_crea_boleta_pendiente(cliente_docente, estudiante, lapso):
    with patch(NOTIFICADOR, return_value=1) as sink:
        respuesta = _post_json(cliente_docente, reverse('boletas:crear'), _cuerpo(estudiante, lapso))

    assert respuesta.status_code == 201
    datos = respuesta.json()
    assert datos['estado'] == 'PENDING'
    assert datos['estado_display'] == 'Pendiente'
    sink.assert_called_once()

    certificado = Certificado.objects.get(pk=datos['id'])
    assert certificado.firmante_cargo == 'Docente de aula'
    assert certificado.estado == EstadoBoleta.PENDIENTE
    assert '"recommendations_1": "Leer cuentos"' in certificado.contenido


def test_formulario_clasico_con_marcas_en_json(cliente_admin, estudiante, lapso):
    cuerpo = _cuerpo(estudiante, lapso)
    cuerpo['marcas'] = json.dumps(cuerpo['marcas'])
    cuerpo['recomendaciones'] = json.dumps(cuerpo['recomendaciones'])

    respuesta = cliente_admin.post(reverse('boletas:crear'), cuerpo)
    assert respuesta.status_code == 201
    assert respuesta.json()['estado'] == 'CONFIRMED'


def test_sin_nivel_responde_400_con_el_mensaje(cliente_docente, estudiante, lapso):
    respuesta = _post_json(cliente_docente, reverse('boletas:crear'), _cuerpo(estudiante, lapso, nivel=''))
    assert respuesta.status_code == 400
    assert respuesta.json()['errors']['nivel'] == (
        "No se puede generar la boleta: El estudiante no pertenece a un Nivel válido."
    )
    assert not Certificado.objects.exists()


def test_texto_demasiado_largo(cliente_docente, estudiante, lapso):
    cuerpo = _cuerpo(estudiante, lapso, caracteristicas='x' * 251)
    respuesta = _post_json(cliente_docente, reverse('boletas:crear'), cuerpo)
    assert respuesta.status_code == 400
    assert 'caracteristicas' in respuesta.json()['errors']

    cuerpo = _cuerpo(estudiante, lapso, recomendaciones={'1': 'y' * 251})
    respuesta = _post_json(cliente_docente, reverse('boletas:crear'), cuerpo)
    assert 'recomendaciones' in respuesta.json()['errors']


def test_estudiante_de_otro_colegio(cliente_docente, lapso, django_user_model):
    otro_colegio = Tenant.objects.create(name='Otro', subdomain='otro')
    ajeno = django_user_model.objects.create_user('ajeno', password='x')
    Perfil.objects.create(user=ajeno, rol='ESTUDIANTE', tenant=otro_colegio)

    respuesta = _post_json(cliente_docente, reverse('boletas:crear'), _cuerpo(ajeno, lapso))
    assert respuesta.status_code == 400
    assert 'usuario' in respuesta.json()['errors']


def test_json_invalido(cliente_docente):
    respuesta = cliente_docente.post(reverse('boletas:crear'), data='{roto', content_type='application/json')
    assert respuesta.status_code == 400


def test_almacen_caido_responde_503(cliente_docente, estudiante, lapso):
    fallo = BoletaPersistenciaError("No se pudo guardar la boleta. Verifique la conexión o intente nuevamente.")
    with patch('apps.boletas.services.almacen.AlmacenCertificados.crear', side_effect=fallo):
        respuesta = _post_json(cliente_docente, reverse('boletas:crear'), _cuerpo(estudiante, lapso))
    assert respuesta.status_code == 503
    assert respuesta.json()['error'].startswith('No se pudo guardar la boleta')


def test_actualizar(cliente_docente, boleta, estudiante, lapso):
    cuerpo = _cuerpo(estudiante, lapso, nivel='Primer Grado', actitudes_habitos='Puntual',
                     marcas={'0-0': 'En proceso'})
    with patch(NOTIFICADOR):
        respuesta = _post_json(cliente_docente, reverse('boletas:actualizar', args=[boleta.pk]), cuerpo)

    assert respuesta.status_code == 200
    assert respuesta.json()['creado'] is False
    boleta.refresh_from_db()
    assert '"actitudesHabitos": "Puntual"' in boleta.contenido
    assert '"0-0": "En proceso"' in boleta.contenido


def test_cargar(cliente_docente, boleta):
    respuesta = cliente_docente.get(reverse('boletas:cargar', args=[boleta.pk]))
    assert respuesta.status_code == 200
    datos = respuesta.json()
    assert datos['estado'] == 'PENDING'
    assert datos['payload']['level'] == 'Primer Grado'
    assert datos['payload']['data']['diasHabiles'] == 4


def test_cargar_inexistente(cliente_docente):
    assert cliente_docente.get(reverse('boletas:cargar', args=[987654])).status_code == 404

# --- Revisión ---

def test_docente_no_puede_aprobar(cliente_docente, boleta):
    respuesta = cliente_docente.post(reverse('boletas:aprobar', args=[boleta.pk]))
    assert respuesta.status_code == 403
    boleta.refresh_from_db()
    assert boleta.estado == EstadoBoleta.PENDIENTE


def test_admin_aprueba(cliente_admin, boleta):
    respuesta = cliente_admin.post(reverse('boletas:aprobar', args=[boleta.pk]))
    assert respuesta.status_code == 200
    assert respuesta.json()['estado'] == 'CONFIRMED'


def test_admin_rechaza_con_motivo(cliente_admin, boleta, docente):
    respuesta = _post_json(cliente_admin, reverse('boletas:rechazar', args=[boleta.pk]), {'motivo': 'Incompleta'})
    assert respuesta.status_code == 200
    assert respuesta.json()['estado'] == 'REJECTED'
    assert docente.mis_notificaciones.get().mensaje.count('Incompleta') == 1


def test_admin_elimina(cliente_admin, boleta):
    respuesta = cliente_admin.post(reverse('boletas:eliminar', args=[boleta.pk]))
    assert respuesta.status_code == 200
    assert not Certificado.objects.filter(pk=boleta.pk).exists()

# --- Impresión ---

def test_documento(cliente_docente, boleta, salon_primaria):
    respuesta = cliente_docente.get(reverse('boletas:documento', args=[boleta.pk]))
    assert respuesta.status_code == 200
    datos = respuesta.json()
    assert len(datos['paginas']) == 1
    assert datos['identidad']['docente'] == 'Luis Gómez'
    assert datos['identidad']['representante'] == 'N/A'
    tipos = [b['tipo'] for b in datos['paginas'][0]['bloques']]
    assert tipos[:3] == ['encabezado', 'datos_primaria', 'resumen_asistencia']


def test_pdf(cliente_docente, boleta):
    with patch('apps.boletas.services.boleta_service.HTML') as html:
        html.return_value.write_pdf.return_value = b'%PDF-1.7 boleta'
        respuesta = cliente_docente.get(reverse('boletas:pdf', args=[boleta.pk]))

    assert respuesta.status_code == 200
    assert respuesta['Content-Type'] == 'application/pdf'
    assert respuesta.content == b'%PDF-1.7 boleta'
    assert f'Boleta_{boleta.pk}_' in respuesta['Content-Disposition']


def test_pdf_con_fallo_de_weasyprint(cliente_docente, boleta):
    with patch('apps.boletas.services.boleta_service.HTML', side_effect=OSError('sin pango')):
        respuesta = cliente_docente.get(reverse('boletas:pdf', args=[boleta.pk]))
    assert respuesta.status_code == 500
