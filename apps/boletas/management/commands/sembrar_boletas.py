import logging
import random
from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from faker import Faker

from apps.academics.models import Asistencia, Lapso, Matricula, Representacion, Salon
from apps.boletas.services import catalogo
from apps.boletas.services.boleta_service import BoletaService
from apps.tenancy.models import Tenant
from apps.tenancy.utils import reset_current_tenant, set_current_tenant
from tasks.models import Perfil

logger = logging.getLogger(__name__)
User = get_user_model()

DOMINIO_DEMO = 'boletas.demo'


class Command(BaseCommand):
    help = 'Genera un colegio de demostración con salones de todos los niveles, asistencia y boletas.'

    # Nombres de salón tal como los escriben los colegios; el clasificador debe reconocerlos
    FORMATOS_SALON = {
        catalogo.SALA_1: 'Sala 1 - {seccion}',
        catalogo.SALA_2: 'Sala II "{seccion}"',
        catalogo.SALA_3: 'Tercer Nivel {seccion}',
        catalogo.PRIMER_GRADO: '[Primer Grado] Sección {seccion}',
        catalogo.SEGUNDO_GRADO: '2do Grado {seccion}',
        catalogo.TERCER_GRADO: '3° Grado - {seccion}',
        catalogo.CUARTO_GRADO: 'Grado 4 {seccion}',
        catalogo.QUINTO_GRADO: 'Quinto Grado {seccion}',
        catalogo.SEXTO_GRADO: '6to grado {seccion}',
    }

    # PRESENTE, TARDE, AUSENTE, JUSTIFICADA
    PESOS_ASISTENCIA = [80, 8, 8, 4]

    def add_arguments(self, parser):
        parser.add_argument('--subdominio', default='demo', help='Subdominio del colegio de demostración')
        parser.add_argument('--por-salon', type=int, default=3, help='Estudiantes por salón')
        parser.add_argument('--sin-boletas', action='store_true', help='No generar boletas, solo la plantilla')
        parser.add_argument('--delete', action='store_true', help='Borrar el colegio de demostración antes de crear')
        parser.add_argument('--semilla', type=int, default=None, help='Semilla para datos reproducibles')

    def handle(self, *args, **options):
        fake = Faker(['es_ES'])
        if options['semilla'] is not None:
            Faker.seed(options['semilla'])
            random.seed(options['semilla'])

        subdominio = options['subdominio']
        por_salon = max(1, options['por_salon'])

        self.stdout.write(self.style.MIGRATE_HEADING(f'\n🚀 Sembrando colegio "{subdominio}"'))

        if options['delete']:
            self.stdout.write(self.style.WARNING("   🗑️  Eliminando datos anteriores..."))
            User.objects.filter(email__endswith=f'@{subdominio}.{DOMINIO_DEMO}').delete()
            Tenant.objects.filter(subdomain=subdominio).delete()

        tenant, _ = Tenant.objects.get_or_create(
            subdomain=subdominio,
            defaults={
                'name': f"U.E. {fake.last_name()}",
                'nombre_complejo': f"Complejo Educativo {fake.last_name()}",
                'municipio': fake.city(),
                'codigo_dea': f"OD{random.randint(10000000, 99999999)}",
            },
        )

        token = set_current_tenant(tenant)
        try:
            with transaction.atomic():
                resumen = self._sembrar(fake, tenant, por_salon, not options['sin_boletas'])
        finally:
            reset_current_tenant(token)

        self.stdout.write(self.style.SUCCESS('\n✨ Colegio de demostración listo'))
        self.stdout.write(f"   🏫 Colegio:      {tenant.name} ({tenant.subdomain})")
        self.stdout.write(f"   📅 Lapsos:       {resumen['lapsos']}")
        self.stdout.write(f"   🚪 Salones:      {resumen['salones']}")
        self.stdout.write(f"   👥 Estudiantes:  {resumen['estudiantes']}")
        self.stdout.write(f"   📝 Boletas:      {resumen['boletas']}")
        self.stdout.write("   🔐 Password:     'password123' (para todos)")

    # ---------------------------------------------------------

    def _usuario(self, fake, tenant, rol, etiqueta):
        nombre, apellido = fake.first_name(), fake.last_name()
        username = f"{etiqueta}.{tenant.subdomain}.{User.objects.count() + 1}"
        user = User.objects.create_user(
            username=username,
            email=f"{username}@{tenant.subdomain}.{DOMINIO_DEMO}",
            password='password123',
            first_name=nombre,
            last_name=apellido,
        )
        Perfil.objects.create(
            user=user,
            rol=rol,
            tenant=tenant,
            numero_documento=f"V-{random.randint(5000000, 35000000)}",
        )
        return user

    def _lapsos(self, tenant):
        hoy = date.today()
        inicio = hoy.year if hoy.month >= 9 else hoy.year - 1
        rangos = [
            ('I Lapso', date(inicio, 9, 15), date(inicio, 12, 15)),
            ('II Lapso', date(inicio + 1, 1, 7), date(inicio + 1, 3, 31)),
            ('III Lapso', date(inicio + 1, 4, 15), date(inicio + 1, 7, 15)),
        ]
        lapsos = []
        for nombre, fecha_inicio, fecha_fin in rangos:
            lapso, _ = Lapso.objects.get_or_create(
                tenant=tenant, nombre=nombre,
                defaults={'fecha_inicio': fecha_inicio, 'fecha_fin': fecha_fin},
            )
            lapsos.append(lapso)
        return lapsos

    def _asistencia(self, estudiante, lapso, dias=20):
        estados = [estado for estado, _ in Asistencia.ESTADO_CHOICES]
        fecha = lapso.fecha_inicio
        registros = []
        while len(registros) < dias and fecha <= lapso.fecha_fin:
            if fecha.weekday() < 5:
                registros.append(Asistencia(
                    tenant=lapso.tenant,
                    estudiante=estudiante,
                    lapso=lapso,
                    fecha=fecha,
                    estado=random.choices(estados, weights=self.PESOS_ASISTENCIA)[0],
                ))
            fecha += timedelta(days=1)
        Asistencia.objects.bulk_create(registros, ignore_conflicts=True)

    def _marcas(self, nivel):
        opciones = catalogo.opciones_calificacion(nivel)
        marcas = {}
        for s, seccion in enumerate(catalogo.obtener_secciones(nivel)):
            for i in range(len(seccion.indicadores)):
                marcas[catalogo.clave_marca(s, i)] = random.choices(opciones, weights=[50, 30, 15, 5])[0]
        return marcas

    def _boleta(self, fake, service, docente, estudiante, nivel, lapso):
        textos = {
            'caracteristicas': fake.text(max_nb_chars=200),
            'actitudes_habitos': fake.text(max_nb_chars=200),
            'recomendaciones_docente': fake.text(max_nb_chars=200),
            'recomendaciones': {
                idx: fake.sentence()
                for idx, seccion in enumerate(catalogo.obtener_secciones(nivel))
                if seccion.tiene_recomendaciones
            },
        }
        datos = {
            'estudiante_id': estudiante.pk,
            'lapso': lapso,
            'nivel': nivel,
            'turno': random.choice(['Mañana', 'Tarde']),
            'dias_habiles': None,
            'firmante_nombre': docente.get_full_name(),
            'firmante_cargo': 'Docente',
            'marcas': self._marcas(nivel),
            **textos,
        }
        return service.guardar(datos, docente)

    def _sembrar(self, fake, tenant, por_salon, con_boletas):
        admin = self._usuario(fake, tenant, 'ADMINISTRADOR', 'admin')
        lapsos = self._lapsos(tenant)
        lapso = lapsos[0]
        service = BoletaService()

        resumen = {'lapsos': len(lapsos), 'salones': 0, 'estudiantes': 0, 'boletas': 0}
        for nivel in catalogo.NIVELES:
            docente = self._usuario(fake, tenant, 'DOCENTE', 'docente')
            salon = Salon.objects.create(
                tenant=tenant,
                nombre=self.FORMATOS_SALON[nivel].format(seccion='A'),
                docente=docente,
            )
            resumen['salones'] += 1

            for _ in range(por_salon):
                estudiante = self._usuario(fake, tenant, 'ESTUDIANTE', 'est')
                representante = self._usuario(fake, tenant, 'ACUDIENTE', 'rep')
                Matricula.objects.create(tenant=tenant, estudiante=estudiante, salon=salon)
                Representacion.objects.create(tenant=tenant, representante=representante, estudiante=estudiante)
                self._asistencia(estudiante, lapso)
                resumen['estudiantes'] += 1

                if con_boletas:
                    self._boleta(fake, service, docente, estudiante, nivel, lapso)
                    resumen['boletas'] += 1

            logger.info(f"Salón '{salon.nombre}' sembrado ({nivel}, {por_salon} estudiantes)")

        logger.info(f"Administrador de demostración: {admin.username}")
        return resumen
