# apps/boletas/services/catalogo.py
"""
Catálogo de indicadores de las boletas descriptivas.

Cada nivel tiene una lista ordenada de secciones; cada sección una lista
ordenada de indicadores. Las posiciones importan: las marcas se guardan con
la clave "{seccion}-{indicador}" y los formatos impresos dependen de este
orden exacto.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

# --- NIVELES ---
SALA_1 = 'Sala 1'
SALA_2 = 'Sala 2'
SALA_3 = 'Sala 3'
PRIMER_GRADO = 'Primer Grado'
SEGUNDO_GRADO = 'Segundo Grado'
TERCER_GRADO = 'Tercer Grado'
CUARTO_GRADO = 'Cuarto Grado'
QUINTO_GRADO = 'Quinto Grado'
SEXTO_GRADO = 'Sexto Grado'

NIVELES_INICIAL = (SALA_1, SALA_2, SALA_3)
NIVELES_PRIMARIA = (
    PRIMER_GRADO, SEGUNDO_GRADO, TERCER_GRADO,
    CUARTO_GRADO, QUINTO_GRADO, SEXTO_GRADO,
)
NIVELES = NIVELES_INICIAL + NIVELES_PRIMARIA
NIVELES_CHOICES = [(n, n) for n in NIVELES]

# Marca que distingue a primaria dentro del nombre del nivel
MARCADOR_PRIMARIA = 'Grado'

# --- ESCALA DESCRIPTIVA ---
CONSOLIDADO = 'Consolidado'
EN_PROCESO = 'En proceso'
INICIADO = 'Iniciado'
SIN_EVIDENCIAS = 'Sin Evidencias'
CON_AYUDA = 'Con Ayuda'

LEYENDA_OPCIONES = {
    CONSOLIDADO: 'Aprendizaje logrado',
    EN_PROCESO: 'En vía para lograr el aprendizaje',
    INICIADO: 'Requiere ayuda para lograr el aprendizaje',
    SIN_EVIDENCIAS: 'Inasistente',
    CON_AYUDA: 'Logra el aprendizaje con ayuda del docente',
}

# Columnas del instrumento impreso de primaria (la última nunca se marca)
COLUMNAS_IMPRESION_PRIMARIA = (
    ('C.', CONSOLIDADO),
    ('E.P.', EN_PROCESO),
    ('I.', INICIADO),
    ('C.A.', None),
)


@dataclass(frozen=True)
class SeccionIndicadores:
    titulo: str
    indicadores: Tuple[str, ...]
    tiene_recomendaciones: bool = False


def es_primaria(nivel) -> bool:
    return bool(nivel) and MARCADOR_PRIMARIA in nivel


def opciones_calificacion(nivel) -> Tuple[str, str, str, str]:
    """Las 4 opciones del editor; la cuarta depende solo de la familia del nivel."""
    cuarta = CON_AYUDA if es_primaria(nivel) else SIN_EVIDENCIAS
    return (CONSOLIDADO, EN_PROCESO, INICIADO, cuarta)


def clave_marca(seccion_idx, indicador_idx) -> str:
    return f"{seccion_idx}-{indicador_idx}"


def clave_recomendaciones(seccion_idx) -> str:
    return f"recommendations_{seccion_idx}"


def nivel_valido(nivel) -> bool:
    return nivel in CATALOGO


def obtener_secciones(nivel) -> Tuple[SeccionIndicadores, ...]:
    """Secciones del nivel; tupla vacía si el nivel no tiene rúbrica."""
    return CATALOGO.get((nivel or '').strip(), ())


# ===================================================================
# EDUCACIÓN INICIAL
# ===================================================================

_FORMACION_PERSONAL = "FORMACIÓN PERSONAL, SOCIAL Y COMUNICACIÓN"
_RELACION_AMBIENTE = "RELACIÓN ENTRE LOS COMPONENTES DEL AMBIENTE"

_SALA_1 = (
    SeccionIndicadores(_FORMACION_PERSONAL, (
        "Participa con agrado en las actividades realizadas con pares y adultos.",
        "Se adapta a situaciones nuevas e imprevistas",
        "Se responsabiliza por sus acciones",
        "Se reconoce como niño o niña",
        "Reconoce la importancia del cuidado de la salud",
        "Identifica costumbres y tradiciones navideñas en Venezuela.",
        "Participa espontáneamente en las conversaciones y cantos.",
        "Utiliza un tono de voz adecuado en su comunicación.",
        "Expresa oralmente hechos a través de su discurso.",
        "Inventa juegos y dramatizaciones",
        "Reconoce el sonido de la vocal Aa",
        "Reconoce el sonido de la vocal Ee",
        "Reconoce la grafía de la vocal Aa",
        "Reconoce la grafía de la vocal Ee",
        "Repasa su nombre con patrón",
        "Realiza trazado guiado",
        "Reconoce la grafía de la primera letra su nombre.",
        "Realiza dibujo libre.",
        "Colorea dentro del contorno de la figura dada.",
        "Coordina movimientos corporales al compas de la música.",
        "Rueda la pelota con manos y pies.",
        "Realiza salto bipodal.",
    )),
    SeccionIndicadores(_RELACION_AMBIENTE, (
        "Reconoce los equipos tecnológicos como recursos para el aprendizaje",
        "Disfruta al adquirir nuevos conocimientos a través de documentales.",
        "Realiza con ayuda del adulto procesos sencillos en la elaboración de recetas.",
        "Reconoce la forma geométrica círculo.",
        "Reconoce la forma geométrica cuadrado.",
        "Traza la forma geométrica círculo.",
        "Traza la forma geométrica cuadrado.",
        "Agrupa objetos al considerar el atributo del color amarillo.",
        "Agrupa objetos al considerar el atributo del color azul.",
        "Agrupa objetos al considerar el atributo del color rojo.",
        "Agrupa objetos de acuerdo a las características iguales - diferentes.",
        "Identifica la relación espacial dentro-fuera.",
        "Identifica la relación espacial arriba-abajo.",
        "Reconoce su mano derecha.",
        "Reconoce su mano izquierda.",
        "Utiliza la escritura convencional para representar el número 1.",
        "Utiliza la escritura convencional para representar el número 2.",
        "Reconoce el símbolo gráfico del número 1.",
        "Reconoce el símbolo gráfico del número 2.",
        "Asigna cantidades de elementos en un conjunto de acuerdo al número dado.",
        "Realiza conteo oral del 1 al 5.",
    ), tiene_recomendaciones=True),
)

_SALA_2 = (
    SeccionIndicadores(_FORMACION_PERSONAL, (
        "Participa con agrado en las actividades realizadas con pares y adultos.",
        "Se adapta a situaciones nuevas e imprevistas.",
        "Se responsabiliza por sus acciones.",
        "Reconoce sus deberes y derechos como niño o niña.",
        "Reconoce la importancia del cuidado de la salud.",
        "Identifica costumbres y tradiciones navideñas en Venezuela.",
        "Participa espontáneamente en las conversaciones y cantos.",
        "Utiliza un tono de voz adecuado en su comunicación.",
        "Expresa oralmente hechos a través de su discurso.",
        "Inventa juegos y dramatizaciones.",
        "Reconoce el sonido y grafía de la vocal Aa.",
        "Reconoce el sonido y grafía de la vocal Ee.",
        "Reconoce el sonido y grafía de la vocal li.",
        "Reconoce el sonido y grafía de la vocal Oo.",
        "Reconoce el sonido y grafía de la vocal Uu.",
        "Reconoce el sonido y grafía de la consonante Mm.",
        "Domina la pinza trípode.",
        "Repasa su nombre y apellido con patrón.",
        "Realiza trazado guiado.",
        "Realiza dibujo libre.",
        "Colorea dentro del contorno de la figura dada.",
        "Coordina movimientos corporales al compas de la música.",
        "Camina siguiendo una línea curva o en zigzag dibujada en el piso.",
        "De pie toca la punta de los pies.",
    )),
    SeccionIndicadores(_RELACION_AMBIENTE, (
        "Reconoce los equipos tecnológicos como recursos para el aprendizaje.",
        "Disfruta al adquirir nuevos conocimientos a través de documentales.",
        "Realiza con ayuda del adulto procesos sencillos en la elaboración de recetas.",
        "Reconoce la forma geométrica círculo.",
        "Reconoce la forma geométrica cuadrado.",
        "Reconoce la forma geométrica triángulo.",
        "Traza la forma geométrica círculo.",
        "Traza la forma geométrica cuadrado.",
        "Traza la forma geométrica triángulo.",
        "Agrupa objetos al considerar el atributo del color amarillo.",
        "Agrupa objetos al considerar el atributo del color azul.",
        "Agrupa objetos al considerar el atributo del color rojo.",
        "Agrupa objetos al considerar el atributo del color anaranjado.",
        "Agrupa objetos al considerar el atributo del color verde.",
        "Agrupa objetos al considerar el atributo del color violeta.",
        "Agrupa objetos de acuerdo a las características iguales - diferentes.",
        "Identifica la relación espacial dentro-fuera.",
        "Identifica la relación espacial arriba-abajo.",
        "Reconoce su mano derecha.",
        "Reconoce su mano izquierda.",
        "Utiliza la escritura convencional para representar el número 1 al 6.",
        "Reconoce el símbolo gráfico del número 1 al 6.",
        "Asigna cantidades de elementos en un conjunto de acuerdo al número dado.",
        "Realiza conteo oral del 1 al 6.",
    ), tiene_recomendaciones=True),
)

_SALA_3 = (
    SeccionIndicadores(_FORMACION_PERSONAL, (
        "Participa con agrado en las actividades realizadas con pares y adultos.",
        "Se responsabiliza por sus acciones.",
        "Reconoce sus deberes y derechos como niño o niña.",
        "Reconoce la importancia del cuidado de la salud.",
        "Identifica costumbres y tradiciones navideñas en Venezuela.",
        "Utiliza un tono de voz adecuado en su comunicación.",
        "Muestra interés por los libros y cuentos",
        "Reconoce el sonido y grafía de la vocal Aa.",
        "Reconoce el sonido y grafía de la vocal Ee.",
        "Reconoce el sonido y grafía de la vocal li.",
        "Reconoce el sonido y grafía de la vocal Oo.",
        "Reconoce el sonido y grafía de la vocal Uu.",
        "Reconoce el sonido y grafía de la consonante Mm.",
        "Reconoce el sonido y grafía de la consonante Pp.",
        "Reconoce el sonido y grafía de la consonante L l.",
        "Reconoce el sonido y grafía de la consonante Ss.",
        "Escribe sílabas combinando vocales con las consonantes vistas por patrón.",
        "Domina la pinza trípode.",
        "Escribe su nombre y apellido en letra scrip.",
        "Realiza dibujo libre con figura humana.",
        "Colorea dentro del contorno de la figura dada.",
        "Coordina movimientos corporales al compas de la música.",
        "Sube y baja escalones uno a uno alternando los pies.",
        "Salta en un solo pie.",
    )),
    SeccionIndicadores(_RELACION_AMBIENTE, (
        "Reconoce los equipos tecnológicos como recursos para el aprendizaje.",
        "Disfruta al adquirir nuevos conocimientos a través de documentales.",
        "Realiza con ayuda del adulto procesos sencillos en la elaboración de recetas.",
        "Reconoce la forma geométrica círculo.",
        "Reconoce la forma geométrica cuadrado.",
        "Reconoce la forma geométrica triángulo.",
        "Reconoce la forma geométrica rectángulo.",
        "Reconoce la forma geométrica óvalo.",
        "Traza las formas geométricas círculo, cuadrado, triángulo, rectángulo y óvalo.",
        "Agrupa objetos al considerar el atributo del color amarillo.",
        "Agrupa objetos al considerar el atributo del color azul.",
        "Agrupa objetos al considerar el atributo del color rojo.",
        "Agrupa objetos al considerar el atributo del color anaranjado.",
        "Agrupa objetos al considerar el atributo del color verde.",
        "Agrupa objetos al considerar el atributo del color violeta.",
        "Agrupa objetos de acuerdo a las características iguales - diferentes.",
        "Identifica la relación espacial dentro-fuera.",
        "Identifica la relación espacial arriba-abajo.",
        "Reconoce correctamente mano derecha e izquierda.",
        "Utiliza la escritura convencional para representar el número 1 al 10.",
        "Reconoce el símbolo gráfico del número 1 al 10.",
        "Asigna cantidades de elementos en un conjunto de acuerdo al número dado.",
        "Realiza conteo oral del 1 al 10.",
        "Realiza conteo oral en forma regresiva del 10 al 1.",
        "Realiza operaciones sencillas de adición.",
    ), tiene_recomendaciones=True),
)

# ===================================================================
# EDUCACIÓN PRIMARIA
# ===================================================================

_LENGUAJE = "LENGUAJE, COMUNICACIÓN Y CULTURA"
_MATEMATICA = "MATEMÁTICA, CIENCIAS NATURALES Y SOCIEDAD"
_SOCIALES = "CIENCIAS SOCIALES, CIUDADANÍA E IDENTIDAD"

_PRIMER_GRADO = (
    SeccionIndicadores(_LENGUAJE, (
        "Participa en conversaciones como oyente y hablante, respetando sus normas.",
        "Comprende el manejo adecuado de las normas de cortesía y el respeto al intercambio oral.",
        "Diferencia las vocales de las consonantes.",
        "Identifica y escribe el abecedario diferenciando las mayúsculas y las minúsculas.",
        "Participa en actos de lecturas comprensivas, expresando con claridad su opinión sobre lo leído.",
        "Identifica personajes, lugares y hechos en lecturas realizadas.",
    )),
    SeccionIndicadores(_MATEMATICA, (
        "Reconoce y dibuja las figuras planas.",
        "Identifica la unidad en un conjunto de elementos del 0 al 9.",
        "Relaciona la grafía de un número con la cantidad de elementos.",
        "Realiza y completa secuencias con objetos, dibujos y números.",
        "Identifica números que van antes o después de un número dado.",
        "Utiliza adecuadamente las relaciones: arriba, abajo, derecha, izquierda, adelante y atrás.",
        "Reconoce los días de la semana.",
        "Identifica las partes del cuerpo humano.",
        "Reconoce los cinco sentidos: vista, oído, gusto, tacto, olfato, y sus órganos.",
        "Reconoce los alimentos saludables.",
        "Explica de manera oral la importancia de tener una alimentación saludable.",
        "Describe los alimentos que son beneficiosos para el organismo.",
    )),
    SeccionIndicadores(_SOCIALES, (
        "Identifica a cada miembro de la familia y las tareas que cada uno realiza.",
        "Aplica las normas de convivencia en el aula y en su entorno.",
        "Reconoce los deberes y derechos de los niños (as).",
    )),
)

_SEGUNDO_GRADO = (
    SeccionIndicadores(_LENGUAJE, (
        "Reconoce el Abecedario.",
        "Reconoce el uso de las letras mayúsculas y minúsculas.",
        "Mantiene una actitud de respeto en situaciones comunicativas de intercambio oral.",
        "Usa el conocimiento del abecedario para leer y escribir, por sí mismo.",
        "Identifica personajes, lugares, situaciones en un texto dado.",
        "Comprende y manifiesta de forma oral el contenido que lee.",
    )),
    SeccionIndicadores(_MATEMATICA, (
        "Reconoce y dibuja los tipos de líneas.",
        "Utiliza instrumentos de medición, como la regla para medir objetos.",
        "Identifica, nombra y dibuja las figuras planas (círculo, cuadrado, triángulo y rectángulo).",
        "Construye series numéricas del 1 al 99 (progresivos y regresivos).",
        "Ubica cantidades en el cartel de valores (unidades, decenas).",
        "Identifica unidades de tiempo como los días, las semanas, los meses.",
        "Identifica animales vertebrados e invertebrados.",
        "Clasifica los alimentos en diferentes grupos: (animales, vegetales y minerales).",
        "Reconoce los alimentos saludables.",
        "Explica de manera oral la importancia de una alimentación saludable.",
        "Dibuja y describe los alimentos que son beneficiosos para el organismo.",
    )),
    SeccionIndicadores(_SOCIALES, (
        "Reconoce y nombra los miembros de su familia y el rol de cada uno de ellos.",
        "Participa en actividades dentro y fuera del aula, relacionadas con los deberes y derechos de los niños (as).",
        "Realiza representaciones indígenas (dramatizaciones).",
    )),
)

_TERCER_GRADO = (
    SeccionIndicadores(_LENGUAJE, (
        "Identifica las normas del intercambio oral.",
        "Realiza y comprende lecturas sencillas.",
        "Utiliza adecuadamente las normas de cortesía.",
        "Respeta los aspectos formales de la escritura: caligrafía, uso de mayúsculas, sangría, márgenes.",
        "Analiza textos, para determinar las oraciones que los integran y las relaciones entre ellas.",
        "Identifica el sujeto, verbo y predicado en una oración.",
    )),
    SeccionIndicadores(_MATEMATICA, (
        "Reconoce en figuras los diferentes tipos de líneas que los componen.",
        "Reconoce figuras planas por sus características (círculo, triángulo, cuadrado, rectángulo).",
        "Utiliza adecuadamente los instrumentos convencionales de la medida de longitud: regla, metro.",
        "Expresa la longitud diferentes objetos del entorno.",
        "Completa series numérica siguiendo un patrón del 1 al 100 (pares e impares).",
        "Lee y escribe cantidades hasta la centena.",
        "Resuelve adiciones con cantidades de tres números en forma horizontal y vertical.",
        "Ordena y resuelve sustracciones con cantidades de tres números.",
        "Identifica las diferentes formas de locomoción en los seres humanos.",
        "Expresa en forma oral, gestual y escrita el movimiento del cuerpo humano.",
        "Reconoce el valor nutritivo de los alimentos.",
    )),
    SeccionIndicadores(_SOCIALES, (
        "Asume su rol como miembro del grupo familiar y responde con afecto, respeto y solidaridad.",
        "Reconoce los derechos que tiene en el grupo escolar y cumple con sus deberes.",
        "Reconoce los aportes culturales, históricos y sociales de la época precolombina.",
    )),
)

_CUARTO_GRADO = (
    SeccionIndicadores(_LENGUAJE, (
        "Utiliza expresiones de cortesía y muestra respeto hacia los oyentes y hablantes.",
        "Identifica los diferentes medios de comunicación para buscar información relevante (tv y radio).",
        "Realiza exposiciones orales demostrando dominio y coherencia.",
        "Adecúa la entonación, el tono de voz y los gestos al realizar la lectura.",
        "Utiliza y reconoce los aspectos formales de la lengua escrita (margen, sangría, letras mayúsculas).",
        "Identifica y diferencia la estructura general de diversos tipos de textos (narrativo y descriptivos).",
    )),
    SeccionIndicadores(_MATEMATICA, (
        "Identifica y representa gráficamente líneas poligonales, diferenciando entre abiertas y cerradas.",
        "Mide y traza longitudes con la regla seleccionando correctamente la unidad: m, cm, mm.",
        "Diferencia triángulos, cuadriláteros según sus lados.",
        "Lee, escribe, y ordena números naturales hasta el millón.",
        "Representa fracciones gráficamente.",
        "Lee, escribe y representa números decimales.",
        "Identifica y clasifica los diferentes tipos de energía (eléctrica, hidráulica, cinética, luminosa...).",
        "Explica los tipos de estado de la materia (sólido, líquido y gaseoso).",
        "Reconoce la importancia de la higiene para la salud física, emocional y social.",
        "Reconoce el valor nutritivo de los alimentos.",
        "Comprende la importancia de una alimentación saludable.",
    )),
    SeccionIndicadores(_SOCIALES, (
        "Comprende la importancia de la familia en la formación de valores y desarrollo personal.",
        "Reconoce los derechos y los deberes de los niños y niñas.",
        "Muestra interés por conocer las distintas organizaciones indígenas venezolana y sus aportes.",
    )),
)

_QUINTO_GRADO = (
    SeccionIndicadores(_LENGUAJE, (
        "Participa en conversaciones respetando el punto de vista de los demás: oyente y el hablante.",
        "Reconoce la importancia de los medios de comunicación como instrumento de aprendizaje (tv, rd).",
        "Realiza producciones escritas respetando los aspectos formales de la lengua escrita.",
        "Construye oraciones con atención al sustantivo, verbo y predicado.",
        "Reconoce la estructura del párrafo y produce párrafos coherentes.",
        "Identifica las estructuras en un texto y la intención narrativa del mismo.",
    )),
    SeccionIndicadores(_MATEMATICA, (
        "Identifica y relaciona los diferentes tipos de medidas de longitud: metro, centímetro y milímetro.",
        "Usa correctamente la regla identificando sus medidas de longitud metro, centímetros, milímetros.",
        "Utiliza el metro o la regla para medir objetos.",
        "Identifica la clasificación de los ángulos.",
        "Traza rectas, semi rectas, paralelas y secantes e identifica los ángulos que se forman entre ellos.",
        "Identifica, lee y escribe números naturales hasta el billón.",
        "Lee y grafica fracciones.",
        "Lee y escribe números decimales.",
        "Realiza investigaciones relacionadas con el magnetismo, la energía y sus transformaciones.",
        "Muestra hábitos higiénicos y alimenticios que le permiten tener buena salud.",
        "Reconoce la importancia de una alimentación saludable y balanceada.",
    )),
    SeccionIndicadores(_SOCIALES, (
        "Respeta las normas de convivencia social en la escuela y la comunidad.",
        "Reconoce la importancia de la práctica de los valores en su vida cotidiana.",
        "Realiza investigaciones sobre las efemérides (Resistencia indígena...).",
    )),
)

_SEXTO_GRADO = (
    SeccionIndicadores(_LENGUAJE, (
        "Participa de forma activa y crítica en la interpretación de lecturas.",
        "Participa en conversaciones y diálogos respetando los puntos de vista de los interlocutores.",
        "Identifica en la oración sus elementos integradores: sujeto, verbo y predicado.",
        "Identifica palabras que amplían el sujeto y el predicado.",
        "Reconoce la estructura del párrafo y sus elementos.",
        "Produce textos significativos, con propósitos: narrativos, informativos y expositivos.",
    )),
    SeccionIndicadores(_MATEMATICA, (
        "Establece equivalencias entre las medidas de longitud, metro, kilómetro, hectómetro entre otros.",
        "Construye, identifica, clasifica los cuerpos geométricos, ángulos, cuadrados, rectángulo y rombo.",
        "Reconoce y clasifica las figuras planas, círculo, triángulo, cuadrado, rectángulo y rombo.",
        "Reconoce y diferencia un sistema de numeración posicional de uno no posicional (números romanos).",
        "Lee, grafica e identifica las fracciones y sus elementos.",
        "Resuelve operaciones sencillas con números naturales y decimales.",
        "Identifica la organización del sistema solar.",
        "Realiza conclusiones sobre fenómenos naturales investigados.",
        "Reconoce la importancia de la salud integral y sus funciones.",
        "Muestra hábitos higiénicos que le permiten la promoción de la salud.",
        "Reconoce los beneficios de una alimentación saludable y balanceada.",
    )),
    SeccionIndicadores(_SOCIALES, (
        "Participa en conversaciones de los derechos y deberes humanos.",
        "Reconoce la diversidad cultural de Venezuela.",
        "Reconoce y participa en la organización de las efemérides.",
    )),
)

CATALOGO: Dict[str, Tuple[SeccionIndicadores, ...]] = {
    SALA_1: _SALA_1,
    SALA_2: _SALA_2,
    SALA_3: _SALA_3,
    PRIMER_GRADO: _PRIMER_GRADO,
    SEGUNDO_GRADO: _SEGUNDO_GRADO,
    TERCER_GRADO: _TERCER_GRADO,
    CUARTO_GRADO: _CUARTO_GRADO,
    QUINTO_GRADO: _QUINTO_GRADO,
    SEXTO_GRADO: _SEXTO_GRADO,
}
