# apps/boletas/models.py
from django.db import models
from django.conf import settings
from django.utils import timezone

from apps.tenancy.mixins import TenantAwareModel
from .services.codec import estado_de

TIPO_BOLETA = 'Boleta'


class Certificado(TenantAwareModel):
    """
    Certificado genérico. Para las boletas, `contenido` guarda la etiqueta
    de estado seguida del JSON de la boleta; el resto de campos pasa tal cual.
    """
    TIPO_CHOICES = (
        (TIPO_BOLETA, 'Boleta Descriptiva'),
        ('Constancia', 'Constancia de Estudio'),
    )
    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='boletas_certificados',
        help_text="Estudiante al que pertenece el documento."
    )
    tipo = models.CharField(max_length=30, choices=TIPO_CHOICES, default=TIPO_BOLETA, db_index=True)
    firmante_nombre = models.CharField(max_length=150, blank=True)
    firmante_cargo = models.CharField(max_length=150, blank=True)
    contenido = models.TextField(blank=True)
    fecha_emision = models.DateTimeField(default=timezone.now)
    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-fecha_emision']
        verbose_name = 'Certificado'
        verbose_name_plural = 'Certificados'

    def __str__(self):
        return f"{self.tipo} #{self.pk} - {self.usuario}"

    @property
    def estado(self):
        return estado_de(self.contenido)
