from datetime import date

import pytest

from apps.academics.models import Asistencia, Lapso, Matricula, Salon
from apps.academics.services import academic_logic


def _marcar(tenant, estudiante, fecha, estado, lapso=None):
    return Asistencia.objects.create(tenant=tenant, estudiante=estudiante, fecha=fecha, estado=estado, lapso=lapso)


def test_agregado_por_estado(tenant, estudiante):
    _marcar(tenant, estudiante, date(2024, 9, 16), 'PRESENTE')
    _marcar(tenant, estudiante, date(2024, 9, 17), 'PRESENTE')
    _marcar(tenant, estudiante, date(2024, 9, 18), 'TARDE')
    _marcar(tenant, estudiante, date(2024, 9, 19), 'AUSENTE')
    _marcar(tenant, estudiante, date(2024, 9, 20), 'JUSTIFICADA')

    assert academic_logic.obtener_asistencia(estudiante.pk) == {
        'present': 2, 'late': 1, 'absent': 1, 'justifiedAbsent': 1,
    }


def test_agregado_por_lapso(tenant, estudiante, lapso):
    otro = Lapso.objects.create(tenant=tenant, nombre='II Lapso',
                                fecha_inicio=date(2025, 1, 7), fecha_fin=date(2025, 3, 28))
    _marcar(tenant, estudiante, date(2024, 9, 16), 'PRESENTE', lapso=lapso)
    _marcar(tenant, estudiante, date(2024, 10, 1), 'AUSENTE')            # sin lapso, dentro del rango
    _marcar(tenant, estudiante, date(2025, 1, 8), 'PRESENTE', lapso=otro)
    _marcar(tenant, estudiante, date(2025, 1, 9), 'PRESENTE')            # sin lapso, fuera del rango

    assert academic_logic.obtener_asistencia(estudiante.pk, lapso.pk) == {
        'present': 1, 'late': 0, 'absent': 1, 'justifiedAbsent': 0,
    }


def test_agregado_vacio(estudiante):
    assert academic_logic.obtener_asistencia(estudiante.pk) == {
        'present': 0, 'late': 0, 'absent': 0, 'justifiedAbsent': 0,
    }


def test_salon_activo_mas_reciente(tenant, estudiante, salon_inicial):
    assert academic_logic.nombre_salon_de_estudiante(estudiante.pk) == 'Sala 2 - B'

    Matricula.objects.filter(estudiante=estudiante).update(activo=False)
    nuevo = Salon.objects.create(tenant=tenant, nombre='Primer Grado A')
    Matricula.objects.create(tenant=tenant, estudiante=estudiante, salon=nuevo)

    assert academic_logic.salon_de_estudiante(estudiante.pk) == nuevo
    assert academic_logic.nombre_salon_de_estudiante(estudiante.pk) == 'Primer Grado A'


def test_estudiante_sin_matricula(estudiante):
    assert academic_logic.nombre_salon_de_estudiante(estudiante.pk) is None
    assert academic_logic.nombre_docente_de_estudiante(estudiante.pk) is None


def test_docente_y_representante(estudiante, salon_primaria, representante):
    assert academic_logic.nombre_docente_de_estudiante(estudiante.pk) == 'Luis Gómez'
    assert academic_logic.representante_de(estudiante.pk) == 'Carmen Pérez'
    assert academic_logic.documento_usuario(estudiante.pk) == 'V-30111222'


def test_nombre_usuario_sin_nombre_completo(crear_usuario):
    user = crear_usuario('sin.nombre', 'ESTUDIANTE')
    assert academic_logic.nombre_usuario(user.pk) == 'sin.nombre'


def test_usuario_inexistente_falla(django_user_model):
    with pytest.raises(django_user_model.DoesNotExist):
        academic_logic.nombre_usuario(999999)


def test_lapso_actual(tenant, lapso):
    assert academic_logic.lapso_actual([lapso], hoy=date(2024, 10, 1)) == lapso
    assert academic_logic.lapso_actual([lapso], hoy=date(2025, 2, 1)) is None
