from django.db import models
from .utils import get_current_tenant


class TenantManager(models.Manager):
    """
    Manager que filtra automáticamente los registros
    según el colegio (tenant) activo en la petición.
    """
    def get_queryset(self):
        tenant = get_current_tenant()
        queryset = super().get_queryset()
        if tenant:
            return queryset.filter(tenant=tenant)
        return queryset


class TenantAwareModel(models.Model):
    """
    Clase base abstracta para los registros que pertenecen a un colegio:
    lapsos, salones, asistencias y certificados.
    """
    tenant = models.ForeignKey(
        'tenancy.Tenant',
        on_delete=models.CASCADE,
        related_name='%(class)s_records',
        verbose_name="Institución",
        null=True,
        blank=True
    )

    objects = TenantManager()         # Filtrado por colegio activo
    all_objects = models.Manager()    # Sin filtro (procesos globales)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        # Hereda el colegio activo si el registro no trae uno
        if not self.tenant_id:
            tenant_actual = get_current_tenant()
            if tenant_actual:
                self.tenant = tenant_actual
        super().save(*args, **kwargs)
