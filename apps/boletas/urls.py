# apps/boletas/urls.py
from django.urls import path

from . import views

app_name = 'boletas'

urlpatterns = [
    # --- FORMULARIO ---
    path('preparar/<int:estudiante_id>/', views.preparar_boleta, name='preparar'),
    path('guardar/', views.guardar_boleta, name='crear'),
    path('<int:certificado_id>/guardar/', views.guardar_boleta, name='actualizar'),
    path('<int:certificado_id>/', views.cargar_boleta, name='cargar'),

    # --- REVISIÓN ---
    path('<int:certificado_id>/aprobar/', views.aprobar_boleta, name='aprobar'),
    path('<int:certificado_id>/rechazar/', views.rechazar_boleta, name='rechazar'),
    path('<int:certificado_id>/eliminar/', views.eliminar_boleta, name='eliminar'),

    # --- IMPRESIÓN ---
    path('<int:certificado_id>/documento/', views.documento_boleta, name='documento'),
    path('<int:certificado_id>/pdf/', views.descargar_boleta_pdf, name='pdf'),
]
