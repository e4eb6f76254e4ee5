from datetime import date

import pytest
from django.contrib.auth import get_user_model

from apps.academics.models import Lapso, Matricula, Representacion, Salon
from apps.boletas.services import datos_complementarios
from apps.tenancy.models import Tenant
from tasks.models import Perfil

User = get_user_model()


@pytest.fixture(autouse=True)
def consultas_en_linea(monkeypatch):
    # Los hilos no ven la transacción abierta de cada test
    monkeypatch.setattr(datos_complementarios, 'MAX_WORKERS', 1)


@pytest.fixture
def tenant(db):
    return Tenant.objects.create(
        name='U.E. Prueba',
        subdomain='prueba',
        nombre_complejo='Complejo Educativo "La Prueba"',
        municipio='Libertador',
        codigo_dea='OD00000001',
    )


@pytest.fixture
def crear_usuario(db, tenant):
    def _crear(username, rol, first_name='', last_name='', documento=None, **extra):
        user = User.objects.create_user(
            username=username,
            password='clave123',
            first_name=first_name,
            last_name=last_name,
            **extra
        )
        Perfil.objects.create(user=user, rol=rol, tenant=tenant, numero_documento=documento)
        return user
    return _crear


@pytest.fixture
def administrador(crear_usuario):
    return crear_usuario('admin', 'ADMINISTRADOR', 'Marta', 'Rangel')


@pytest.fixture
def docente(crear_usuario):
    return crear_usuario('docente', 'DOCENTE', 'Luis', 'Gómez')


@pytest.fixture
def estudiante(crear_usuario):
    return crear_usuario('ana', 'ESTUDIANTE', 'Ana', 'Pérez', documento='V-30111222')


@pytest.fixture
def representante(crear_usuario, estudiante, tenant):
    rep = crear_usuario('rep', 'ACUDIENTE', 'Carmen', 'Pérez')
    Representacion.objects.create(tenant=tenant, representante=rep, estudiante=estudiante)
    return rep


@pytest.fixture
def lapso(tenant):
    # Lunes 16/09/2024 a viernes 13/12/2024
    return Lapso.objects.create(
        tenant=tenant,
        nombre='I Lapso',
        fecha_inicio=date(2024, 9, 16),
        fecha_fin=date(2024, 12, 13),
    )


@pytest.fixture
def salon_primaria(tenant, docente, estudiante):
    salon = Salon.objects.create(tenant=tenant, nombre='[Primer Grado] Sección A', docente=docente)
    Matricula.objects.create(tenant=tenant, estudiante=estudiante, salon=salon)
    return salon


@pytest.fixture
def salon_inicial(tenant, docente, estudiante):
    salon = Salon.objects.create(tenant=tenant, nombre='Sala 2 - B', docente=docente)
    Matricula.objects.create(tenant=tenant, estudiante=estudiante, salon=salon)
    return salon


@pytest.fixture
def cliente_docente(client, docente):
    client.force_login(docente)
    return client


@pytest.fixture
def cliente_admin(client, administrador):
    client.force_login(administrador)
    return client
