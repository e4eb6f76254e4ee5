from django.db import models
from django.conf import settings

from apps.tenancy.mixins import TenantAwareModel

# ===================================================================
# CONSTANTES Y OPCIONES
# ===================================================================

ROLES_CHOICES = (
    ('ESTUDIANTE', 'Estudiante'),
    ('DOCENTE', 'Docente'),
    ('ADMINISTRADOR', 'Administrador'),
    ('COORD_ACADEMICO', 'Coord. Académico'),
    ('ACUDIENTE', 'Representante'),
)

PREFIJOS_DOCUMENTO = (
    ('V', 'Venezolano'),
    ('E', 'Extranjero'),
)

# ===================================================================
# PERFILES Y USUARIOS
# ===================================================================

class Perfil(TenantAwareModel):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, primary_key=True)
    rol = models.CharField(max_length=20, choices=ROLES_CHOICES, default='ESTUDIANTE')
    numero_documento = models.CharField(
        max_length=30,
        blank=True,
        null=True,
        verbose_name="Documento de Identidad",
        db_index=True,
        help_text="Cédula o cédula escolar (C.E.)."
    )

    class Meta:
        verbose_name = 'Perfil de Usuario'
        verbose_name_plural = 'Perfiles de Usuario'

    def __str__(self):
        return f'{self.user.username} ({self.get_rol_display()})'

# ===================================================================
# NOTIFICACIONES INTERNAS
# ===================================================================

class Notificacion(models.Model):
    TIPO_CHOICES = (
        ('BOLETA', 'Revisión de Boleta'),
        ('SISTEMA', 'Sistema'),
    )
    usuario = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='mis_notificaciones')
    titulo = models.CharField(max_length=150)
    mensaje = models.TextField()
    tipo = models.CharField(max_length=20, choices=TIPO_CHOICES, default='SISTEMA')
    leida = models.BooleanField(default=False)
    fecha_creacion = models.DateTimeField(auto_now_add=True)
    link_destino = models.CharField(max_length=200, blank=True, null=True)

    class Meta:
        ordering = ['-fecha_creacion']

    def __str__(self):
        return f"{self.titulo} -> {self.usuario}"
