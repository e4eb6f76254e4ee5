# apps/tenancy/models.py
from django.db import models


class Tenant(models.Model):
    """
    Representa a cada Colegio (Inquilino) del sistema.
    Los campos de membrete alimentan el encabezado impreso de las boletas.
    """
    name = models.CharField(max_length=100, unique=True)
    subdomain = models.CharField(max_length=50, unique=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    # --- MEMBRETE INSTITUCIONAL ---
    nombre_complejo = models.CharField(
        max_length=150, blank=True,
        help_text="Nombre impreso como: Complejo Educativo \"...\". Vacío = usar 'name'."
    )
    municipio = models.CharField(max_length=150, blank=True)
    codigo_dea = models.CharField(max_length=30, blank=True, verbose_name="Código D.E.A.")

    class Meta:
        verbose_name = "Institución"
        verbose_name_plural = "Instituciones"

    def __str__(self):
        return self.name

    @property
    def nombre_impreso(self):
        return self.nombre_complejo or self.name
