# ===================================================================
# escolar/urls.py (VERSIÓN MODULAR - CONEXIÓN GLOBAL)
# ===================================================================

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # 1. 🔑 Panel de Administración nativo de Django
    path('admin/', admin.site.urls),

    # 2. 📝 BOLETAS DESCRIPTIVAS: Inicial y Primaria
    path('boletas/', include('apps.boletas.urls')),
]
