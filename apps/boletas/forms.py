# apps/boletas/forms.py
from django import forms
from django.contrib.auth import get_user_model

from apps.academics.models import Lapso
from apps.tenancy.utils import get_current_tenant
from tasks.models import PREFIJOS_DOCUMENTO
from .services.catalogo import NIVELES_CHOICES
from .services.composer import MAX_TEXTO_LIBRE, MAX_TEXTO_MANUAL
from .services.payload import DocenteSecundario, TURNOS, TURNO_POR_DEFECTO, es_clave_marca

User = get_user_model()

MENSAJE_SIN_NIVEL = "No se puede generar la boleta: El estudiante no pertenece a un Nivel válido."


class BoletaForm(forms.Form):
    """
    Captura de una boleta descriptiva. Las marcas llegan como un objeto
    {"s-i": opción} y las recomendaciones por sección como {s: texto}.
    """
    usuario = forms.ModelChoiceField(
        queryset=User.objects.all(),
        error_messages={'required': "Debe seleccionar un estudiante.",
                        'invalid_choice': "El estudiante no existe o no pertenece a este colegio."},
    )
    lapso = forms.ModelChoiceField(
        queryset=Lapso.all_objects.all(),
        error_messages={'required': "Debe seleccionar un lapso.",
                        'invalid_choice': "El lapso seleccionado no existe."},
    )
    nivel = forms.ChoiceField(
        choices=NIVELES_CHOICES,
        error_messages={'required': MENSAJE_SIN_NIVEL, 'invalid_choice': MENSAJE_SIN_NIVEL},
    )
    turno = forms.ChoiceField(choices=[(t, t) for t in TURNOS], required=False)
    dias_habiles = forms.CharField(max_length=10, required=False, label="Días hábiles")

    firmante_nombre = forms.CharField(max_length=150, required=False)
    firmante_cargo = forms.CharField(max_length=150, required=False)

    marcas = forms.JSONField(required=False)
    recomendaciones = forms.JSONField(required=False)

    caracteristicas = forms.CharField(max_length=MAX_TEXTO_LIBRE, required=False,
                                      label="Características de la actuación escolar")
    actitudes_habitos = forms.CharField(max_length=MAX_TEXTO_LIBRE, required=False,
                                        label="Actitudes, hábitos de trabajo")
    recomendaciones_docente = forms.CharField(max_length=MAX_TEXTO_LIBRE, required=False,
                                              label="Recomendaciones del docente")

    docente_secundario_nombre = forms.CharField(max_length=150, required=False)
    docente_secundario_prefijo = forms.ChoiceField(choices=PREFIJOS_DOCUMENTO, required=False)
    docente_secundario_cedula = forms.RegexField(regex=r'^\d*$', max_length=12, required=False,
                                                 error_messages={'invalid': "La cédula solo admite dígitos."})

    asistencias_manual = forms.CharField(max_length=MAX_TEXTO_MANUAL, required=False)
    inasistencias_manual = forms.CharField(max_length=MAX_TEXTO_MANUAL, required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        tenant = get_current_tenant()
        if tenant:
            self.fields['usuario'].queryset = User.objects.filter(
                perfil__tenant=tenant,
                perfil__rol='ESTUDIANTE'
            )
            self.fields['lapso'].queryset = Lapso.objects.all()

    def clean_dias_habiles(self):
        valor = (self.cleaned_data.get('dias_habiles') or '').strip()
        if valor.startswith('-'):
            raise forms.ValidationError("Los días hábiles no pueden ser negativos.")
        return valor

    def clean_marcas(self):
        marcas = self.cleaned_data.get('marcas') or {}
        if not isinstance(marcas, dict):
            raise forms.ValidationError("Las marcas deben enviarse como objeto.")
        return {k: v for k, v in marcas.items() if es_clave_marca(k) and isinstance(v, str)}

    def clean_recomendaciones(self):
        recomendaciones = self.cleaned_data.get('recomendaciones') or {}
        if not isinstance(recomendaciones, dict):
            raise forms.ValidationError("Las recomendaciones deben enviarse como objeto.")
        limpias = {}
        for clave, texto in recomendaciones.items():
            try:
                indice = int(clave)
            except (TypeError, ValueError):
                continue
            texto = '' if texto is None else str(texto)
            if len(texto) > MAX_TEXTO_LIBRE:
                raise forms.ValidationError(
                    f"Las recomendaciones no pueden superar {MAX_TEXTO_LIBRE} caracteres."
                )
            limpias[indice] = texto
        return limpias

    def datos_boleta(self):
        """Datos limpios con la forma que espera BoletaService.guardar."""
        cd = self.cleaned_data
        secundario = None
        if cd.get('docente_secundario_nombre', '').strip():
            secundario = DocenteSecundario(
                nombre=cd['docente_secundario_nombre'].strip(),
                cedula_prefijo=cd.get('docente_secundario_prefijo') or 'V',
                cedula_numero=cd.get('docente_secundario_cedula') or '',
            )
        return {
            'estudiante_id': cd['usuario'].pk,
            'lapso': cd['lapso'],
            'nivel': cd['nivel'],
            'turno': cd.get('turno') or TURNO_POR_DEFECTO,
            'dias_habiles': cd.get('dias_habiles'),
            'firmante_nombre': cd.get('firmante_nombre', ''),
            'firmante_cargo': cd.get('firmante_cargo', ''),
            'marcas': cd.get('marcas') or {},
            'recomendaciones': cd.get('recomendaciones') or {},
            'caracteristicas': cd.get('caracteristicas', ''),
            'actitudes_habitos': cd.get('actitudes_habitos', ''),
            'recomendaciones_docente': cd.get('recomendaciones_docente', ''),
            'docente_secundario': secundario,
            'asistencias_manual': cd.get('asistencias_manual', ''),
            'inasistencias_manual': cd.get('inasistencias_manual', ''),
        }

    def errores_por_campo(self):
        return {campo: str(errores[0]) for campo, errores in self.errors.items()}
