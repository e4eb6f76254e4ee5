from datetime import date
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django.test import RequestFactory

from apps.academics.models import Asistencia
from apps.boletas.exceptions import (
    BoletaPersistenciaError, BoletaValidacionError, PaginacionError, TransicionInvalidaError,
)
from apps.boletas.models import Certificado
from apps.boletas.services.almacen import AlmacenCertificados
from apps.boletas.services.boleta_service import BoletaService
from apps.boletas.services.codec import ETIQUETA_CONFIRMADA, EstadoBoleta, decodificar
from tasks.models import Notificacion

NOTIFICADOR = 'apps.boletas.services.aprobacion.notificar_rol'


def _datos(estudiante, lapso, nivel='Primer Grado', **extra):
    datos = {
        'estudiante_id': estudiante.pk,
        'lapso': lapso,
        'nivel': nivel,
        'turno': 'Mañana',
        'dias_habiles': None,
        'firmante_nombre': '',
        'firmante_cargo': 'Docente',
        'marcas': {'0-0': 'Consolidado', '1-2': 'Con Ayuda'},
        'actitudes_habitos': 'Responsable',
        'recomendaciones_docente': 'Leer en casa',
    }
    datos.update(extra)
    return datos


@pytest.fixture
def service():
    return BoletaService(max_workers=1)


@pytest.fixture
def asistencia(tenant, estudiante, lapso):
    dias = [
        (date(2024, 9, 16), 'PRESENTE'), (date(2024, 9, 17), 'PRESENTE'),
        (date(2024, 9, 18), 'TARDE'), (date(2024, 9, 19), 'AUSENTE'),
    ]
    for fecha, estado in dias:
        Asistencia.objects.create(tenant=tenant, estudiante=estudiante, lapso=lapso, fecha=fecha, estado=estado)


# ---------------------------------------------------------
# Preparación
# ---------------------------------------------------------

def test_preparar_formulario_primaria(service, estudiante, salon_primaria, lapso, asistencia):
    datos = service.preparar_formulario(estudiante.pk, lapso.pk)

    assert datos['nivel'] == 'Primer Grado'
    assert datos['nivel_origen'] == 'etiqueta'
    assert datos['tipo_mensaje'] == 'success'
    assert datos['lapso_id'] == lapso.pk
    assert datos['dias_habiles'] == 65
    assert datos['asistencia'] == {'present': 2, 'late': 1, 'absent': 1, 'justifiedAbsent': 0}
    assert datos['opciones'][3] == 'Con Ayuda'
    assert [s['indice'] for s in datos['secciones']] == [0, 1, 2]
    assert datos['secciones'][0]['indicadores'][0]['clave'] == '0-0'


def test_preparar_formulario_sin_salon(service, estudiante, lapso):
    datos = service.preparar_formulario(estudiante.pk)
    assert datos['nivel'] is None
    assert datos['tipo_mensaje'] == 'warning'
    assert datos['secciones'] == []
    assert datos['lapso_id'] == lapso.pk


def test_preparar_formulario_con_asistencia_caida(service, estudiante, salon_inicial, lapso):
    with patch('apps.academics.services.academic_logic.obtener_asistencia', side_effect=DatabaseError):
        datos = service.preparar_formulario(estudiante.pk, lapso.pk)
    assert datos['nivel'] == 'Sala 2'
    assert datos['asistencia'] == {'present': 0, 'late': 0, 'absent': 0, 'justifiedAbsent': 0}

# ---------------------------------------------------------
# Guardado
# ---------------------------------------------------------

def test_revisor_crea_boleta_confirmada_sin_avisos(service, administrador, estudiante, lapso, asistencia):
    with patch(NOTIFICADOR) as sink:
        resultado = service.guardar(_datos(estudiante, lapso), administrador)

    sink.assert_not_called()
    assert resultado.creado
    assert resultado.estado == EstadoBoleta.CONFIRMADA

    certificado = Certificado.objects.get(pk=resultado.certificado.pk)
    assert certificado.contenido.startswith(ETIQUETA_CONFIRMADA)
    assert certificado.tipo == 'Boleta'
    assert certificado.usuario == estudiante
    assert certificado.tenant == administrador.perfil.tenant
    assert certificado.firmante_nombre == 'Marta Rangel'

    _, payload = decodificar(certificado.contenido)
    assert payload['level'] == 'Primer Grado'
    assert payload['createdBy'] == administrador.pk
    assert payload['attendance'] == {'present': 2, 'late': 1, 'absent': 1, 'justifiedAbsent': 0, 'total': 4}
    assert payload['lapso']['lapsoID'] == lapso.pk
    assert payload['schoolName'] == 'Complejo Educativo "La Prueba"'
    assert payload['data']['0-0'] == 'Consolidado'


def test_docente_crea_boleta_pendiente_y_avisa(service, docente, estudiante, lapso):
    with patch(NOTIFICADOR, return_value=1) as sink:
        resultado = service.guardar(_datos(estudiante, lapso), docente)

    assert resultado.estado == EstadoBoleta.PENDIENTE
    assert resultado.notificados == 1
    sink.assert_called_once()
    titulo, contenido = sink.call_args.args[1:3]
    assert titulo == f'[BOLETA_REQUEST][ID:{resultado.certificado.pk}] Revisión de Boleta'
    assert f'?highlight={resultado.certificado.pk}' in contenido
    assert 'Ana Pérez' in contenido


def test_docente_edita_boleta_aprobada_vuelve_a_pendiente(service, administrador, docente, estudiante, lapso):
    with patch(NOTIFICADOR):
        creada = service.guardar(_datos(estudiante, lapso), administrador)

    with patch(NOTIFICADOR) as sink:
        editada = service.guardar(_datos(estudiante, lapso, actitudes_habitos='Muy responsable'),
                                  docente, creada.certificado.pk)

    assert sink.call_count == 1
    assert editada.estado == EstadoBoleta.PENDIENTE
    assert not editada.creado
    assert Certificado.objects.count() == 1
    _, payload = decodificar(Certificado.objects.get().contenido)
    assert payload['data']['actitudesHabitos'] == 'Muy responsable'
    assert payload['createdBy'] == administrador.pk


def test_revisor_edita_y_conserva_estado(service, administrador, docente, estudiante, lapso):
    with patch(NOTIFICADOR):
        creada = service.guardar(_datos(estudiante, lapso), docente)
    with patch(NOTIFICADOR) as sink:
        editada = service.guardar(_datos(estudiante, lapso), administrador, creada.certificado.pk)

    sink.assert_not_called()
    assert editada.estado == EstadoBoleta.PENDIENTE
    _, payload = decodificar(editada.certificado.contenido)
    assert payload['createdBy'] == docente.pk


@pytest.mark.parametrize('nivel', [None, '', 'Maternal'])
def test_nivel_invalido_no_se_guarda(service, administrador, estudiante, lapso, nivel):
    with pytest.raises(BoletaValidacionError) as excinfo:
        service.guardar(_datos(estudiante, lapso, nivel=nivel), administrador)
    assert 'nivel' in excinfo.value.errores
    assert not Certificado.objects.exists()


def test_sin_lapso_no_se_guarda(service, administrador, estudiante):
    with pytest.raises(BoletaValidacionError) as excinfo:
        service.guardar(_datos(estudiante, None), administrador)
    assert excinfo.value.errores == {'lapso': "Debe seleccionar un lapso."}


def test_dias_habiles_informados_fijan_el_total(service, administrador, estudiante, lapso, asistencia):
    resultado = service.guardar(_datos(estudiante, lapso, dias_habiles='20'), administrador)
    assert resultado.payload.asistencia['total'] == 20
    assert resultado.payload.data['diasHabiles'] == 20


def test_asistencia_caida_usa_la_instantanea_previa(service, administrador, estudiante, lapso, asistencia):
    creada = service.guardar(_datos(estudiante, lapso), administrador)
    with patch('apps.academics.services.academic_logic.obtener_asistencia', side_effect=DatabaseError):
        editada = service.guardar(_datos(estudiante, lapso), administrador, creada.certificado.pk)
    assert editada.payload.asistencia['present'] == 2
    assert editada.payload.asistencia['total'] == 4


def test_lapso_guardado_no_sigue_cambios_del_lapso(service, administrador, estudiante, lapso):
    creada = service.guardar(_datos(estudiante, lapso), administrador)
    lapso.fecha_fin = date(2025, 1, 31)
    lapso.save()

    editada = service.guardar(_datos(estudiante, lapso), administrador, creada.certificado.pk)
    assert editada.payload.lapso.fecha_fin == '2024-12-13'


def test_fallo_del_almacen_se_propaga(administrador, estudiante, lapso):
    service = BoletaService(max_workers=1)
    with patch.object(Certificado.objects, 'create', side_effect=DatabaseError('sin conexión')):
        with pytest.raises(BoletaPersistenciaError) as excinfo:
            service.guardar(_datos(estudiante, lapso), administrador)
    assert 'No se pudo guardar la boleta' in str(excinfo.value)


def test_actualizar_inexistente(db):
    with pytest.raises(Certificado.DoesNotExist):
        AlmacenCertificados().actualizar(424242, {'contenido': '{}'})

# ---------------------------------------------------------
# Lectura, revisión y eliminación
# ---------------------------------------------------------

def test_cargar_migra_marcas_y_prefija_dias(service, estudiante, lapso):
    legado = (
        '{"level": "Segundo Grado", "data": {"0-0": "Sin Evidencias", "diasHabiles": ""},'
        ' "lapso": {"lapsoID": %d, "nombre": "I Lapso", "fechaInicio": "2024-09-16",'
        ' "fechaFin": "2024-09-22"}, "createdBy": null}' % lapso.pk
    )
    certificado = Certificado.objects.create(usuario=estudiante, contenido=legado)

    datos = service.cargar(certificado.pk)
    assert datos['estado'] == 'PENDING'
    assert datos['payload']['data']['0-0'] == 'Con Ayuda'
    assert datos['payload']['data']['diasHabiles'] == 5
    assert datos['creado_por'] == estudiante.pk


def test_cargar_contenido_danado(service, estudiante):
    certificado = Certificado.objects.create(usuario=estudiante, contenido=ETIQUETA_CONFIRMADA + '{roto')
    datos = service.cargar(certificado.pk)
    assert datos['estado'] == 'CONFIRMED'
    assert datos['payload']['data'] == {}


def test_aprobar_avisa_al_autor(service, administrador, docente, estudiante, lapso):
    with patch(NOTIFICADOR):
        creada = service.guardar(_datos(estudiante, lapso), docente)

    certificado = service.aprobar(creada.certificado.pk, administrador)
    assert certificado.estado == EstadoBoleta.CONFIRMADA
    aviso = Notificacion.objects.get(usuario=docente)
    assert aviso.titulo == '[BOLETA_STATUS] Boleta Aprobada'


def test_rechazar_con_motivo(service, administrador, docente, estudiante, lapso):
    with patch(NOTIFICADOR):
        creada = service.guardar(_datos(estudiante, lapso), docente)

    certificado = service.rechazar(creada.certificado.pk, administrador, 'Falta la firma')
    assert certificado.estado == EstadoBoleta.RECHAZADA
    _, payload = decodificar(certificado.contenido)
    assert payload['level'] == 'Primer Grado'
    assert 'Falta la firma' in Notificacion.objects.get(usuario=docente).mensaje


def test_docente_no_puede_aprobar(service, docente, estudiante, lapso):
    with patch(NOTIFICADOR):
        creada = service.guardar(_datos(estudiante, lapso), docente)
    with pytest.raises(TransicionInvalidaError):
        service.aprobar(creada.certificado.pk, docente)
    assert Certificado.objects.get().estado == EstadoBoleta.PENDIENTE


def test_eliminar(service, administrador, estudiante, lapso):
    creada = service.guardar(_datos(estudiante, lapso), administrador)
    service.eliminar(creada.certificado.pk)
    assert not Certificado.objects.exists()

# ---------------------------------------------------------
# Documento e impresión
# ---------------------------------------------------------

def test_documento_primaria(service, administrador, estudiante, lapso, salon_primaria, representante):
    creada = service.guardar(_datos(estudiante, lapso), administrador)
    doc = service.documento(creada.certificado.pk)

    assert len(doc['paginas']) == 1
    assert doc['identidad'].docente == 'Luis Gómez'
    assert doc['identidad'].representante == 'Carmen Pérez'
    encabezado = doc['paginas'][0].bloques[0].datos
    assert encabezado['codigo_dea'] == 'OD00000001'


def test_documento_inicial(service, administrador, estudiante, lapso):
    creada = service.guardar(_datos(estudiante, lapso, nivel='Sala 3', marcas={'1-0': 'Sin Evidencias'}),
                             administrador)
    doc = service.documento(creada.certificado.pk)
    assert [p.numero for p in doc['paginas']] == [1, 2]
    assert doc['identidad'].estudiante == 'Ana Pérez'


def test_documento_de_nivel_sin_formato(service, estudiante):
    certificado = Certificado.objects.create(usuario=estudiante, contenido='{"level": "Maternal"}')
    with pytest.raises(PaginacionError):
        service.documento(certificado.pk)


def test_generar_pdf(service, administrador, estudiante, lapso):
    creada = service.guardar(_datos(estudiante, lapso), administrador)
    request = RequestFactory().get('/boletas/pdf/')

    with patch('apps.boletas.services.boleta_service.HTML') as html:
        html.return_value.write_pdf.return_value = b'%PDF-1.7'
        pdf = service.generar_pdf(creada.certificado.pk, request)

    assert pdf == b'%PDF-1.7'
    html_string = html.call_args.kwargs['string']
    assert 'INSTRUMENTO DE EVALUACIÓN DE EDUCACIÓN PRIMARIA' in html_string
    assert 'Página 1 de 1' in html_string
    assert '<title>Boleta Primer Grado - Ana Pérez</title>' in html_string
    assert 'content="boleta, ana-perez, primer-grado"' in html_string


def test_pdf_sin_municipio_en_el_colegio_usa_el_membrete_configurado(
        service, administrador, estudiante, lapso, tenant):
    tenant.municipio = ''
    tenant.save()
    creada = service.guardar(_datos(estudiante, lapso), administrador)

    with patch('apps.boletas.services.boleta_service.HTML') as html:
        html.return_value.write_pdf.return_value = b'%PDF-1.7'
        service.generar_pdf(creada.certificado.pk, RequestFactory().get('/boletas/pdf/'))

    html_string = html.call_args.kwargs['string']
    assert 'Municipio San Diego - Edo. Carabobo' in html_string
    assert 'Municipio Municipio' not in html_string
