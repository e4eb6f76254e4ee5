# apps/boletas/exceptions.py


class BoletaError(Exception):
    """Error base del subsistema de boletas."""


class BoletaValidacionError(BoletaError):
    """
    Datos insuficientes para guardar (nivel, lapso, textos demasiado largos).
    `errores` mapea campo -> mensaje para mostrarlos junto al formulario.
    """
    def __init__(self, errores):
        self.errores = dict(errores)
        super().__init__("; ".join(f"{campo}: {msg}" for campo, msg in self.errores.items()))


class BoletaPersistenciaError(BoletaError):
    """El almacén de certificados no respondió. El mensaje se muestra tal cual."""


class TransicionInvalidaError(BoletaError):
    """Cambio de estado no permitido para el autor."""


class PaginacionError(BoletaError):
    """La forma del catálogo ya no coincide con el formato impreso del nivel."""
