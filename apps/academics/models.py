# apps/academics/models.py
from django.db import models
from django.conf import settings
from apps.tenancy.mixins import TenantAwareModel


class Lapso(TenantAwareModel):
    """Periodo de evaluación (Ej: I Lapso, II Lapso) con sus fechas de inicio y cierre."""
    nombre = models.CharField(max_length=50)
    fecha_inicio = models.DateField()
    fecha_fin = models.DateField()
    activo = models.BooleanField(default=True)

    class Meta:
        ordering = ['fecha_inicio']

    def __str__(self):
        return f"{self.nombre}"


class Salon(TenantAwareModel):
    """
    Salón o sección (Ej: "Sala 2 - A", "[Primer Grado] Sección B").
    El nombre visible es la fuente para detectar el nivel de la boleta.
    """
    nombre = models.CharField(max_length=100)
    docente = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='academics_salones_dirigidos'
    )
    activo = models.BooleanField(default=True)

    def __str__(self):
        return self.nombre


class Matricula(TenantAwareModel):
    """Vínculo entre estudiante y salón."""
    estudiante = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='academics_matriculas'
    )
    salon = models.ForeignKey(
        Salon,
        on_delete=models.CASCADE,
        related_name='matriculados'
    )
    activo = models.BooleanField(default=True)
    fecha_inicio = models.DateField(auto_now_add=True)


class Representacion(TenantAwareModel):
    """Relación representante (acudiente) -> estudiante."""
    representante = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='academics_representados'
    )
    estudiante = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='academics_representantes'
    )


class Asistencia(TenantAwareModel):
    ESTADO_CHOICES = (
        ('PRESENTE', 'Presente'),
        ('TARDE', 'Llegada Tardía'),
        ('AUSENTE', 'Inasistente'),
        ('JUSTIFICADA', 'Inasistencia Justificada'),
    )
    estudiante = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='academics_asistencias'
    )
    lapso = models.ForeignKey(Lapso, on_delete=models.SET_NULL, null=True, blank=True)
    fecha = models.DateField()
    estado = models.CharField(max_length=15, choices=ESTADO_CHOICES, default='PRESENTE')

    class Meta:
        unique_together = ('estudiante', 'fecha')
        ordering = ['-fecha']
