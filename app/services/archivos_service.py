# app/services/archivos_service.py
import logging
import os
import secrets
import time
from contextlib import contextmanager

from flask import current_app
from werkzeug.utils import secure_filename

from app.errors import ErrorArchivo, ErrorValidacion
from app.extensions import db

logger = logging.getLogger(__name__)

CATEGORIA_FOTOS = 'fotos'

# Categoría -> carpeta relativa dentro de UPLOAD_FOLDER
CATEGORIAS_DOCUMENTO = {
    'evaluaciones': 'evaluaciones',
    'formacion-inicial': 'formacion-inicial',
    'competencias-basicas': 'competencias-basicas',
    'historial-laboral': 'evaluacion-desempeno/historial-laboral',
    'incapacidades-ausencias': 'evaluacion-desempeno/incapacidades-ausencias',
    'estimulos-sanciones': 'evaluacion-desempeno/estimulos-sanciones',
    'separacion-servicio': 'evaluacion-desempeno/separacion-servicio',
}

EXTENSIONES_DOCUMENTO = {'.pdf'}

# La extensión y el MIME declarado deben apuntar al mismo formato
MIME_POR_EXTENSION_FOTO = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
}


class ArchivosService:

    @staticmethod
    def carpeta_categoria(categoria):
        if categoria == CATEGORIA_FOTOS:
            return CATEGORIA_FOTOS
        if categoria not in CATEGORIAS_DOCUMENTO:
            raise ErrorValidacion(f"Categoría de archivo desconocida: {categoria}")
        return CATEGORIAS_DOCUMENTO[categoria]

    @staticmethod
    def preparar_directorios():
        """Crea la raíz de uploads y todas las carpetas por categoría."""
        raiz = current_app.config['UPLOAD_FOLDER']
        carpetas = [CATEGORIA_FOTOS] + list(CATEGORIAS_DOCUMENTO.values())
        for carpeta in carpetas:
            os.makedirs(os.path.join(raiz, carpeta), exist_ok=True)

    @staticmethod
    def tamanio(archivo):
        stream = archivo.stream
        stream.seek(0, os.SEEK_END)
        total = stream.tell()
        stream.seek(0)
        return total

    @staticmethod
    def validar(archivo, categoria):
        """Devuelve la extensión normalizada del archivo o lanza ErrorArchivo."""
        if not archivo or not archivo.filename:
            raise ErrorArchivo('No se ha subido ningún archivo')

        extension = os.path.splitext(archivo.filename)[1].lower()
        cfg = current_app.config

        if categoria == CATEGORIA_FOTOS:
            mime_esperado = MIME_POR_EXTENSION_FOTO.get(extension)
            mime_declarado = (archivo.mimetype or '').lower()
            if not mime_esperado or mime_declarado != mime_esperado:
                raise ErrorArchivo('Solo se permiten imágenes (JPEG, JPG, PNG, GIF)')
            limite = cfg['LIMITE_FOTO_BYTES']
        else:
            if extension not in EXTENSIONES_DOCUMENTO:
                raise ErrorArchivo('Solo se permiten archivos PDF')
            limite = cfg['LIMITE_PDF_BYTES']

        total = ArchivosService.tamanio(archivo)
        if total == 0:
            raise ErrorArchivo('El archivo está vacío')
        if total > limite:
            raise ErrorArchivo(f"El archivo excede el tamaño máximo de {limite // (1024 * 1024)} MB")

        return extension

    @staticmethod
    def guardar(archivo, categoria, prefijo=''):
        """
        Guarda el archivo con un nombre generado (nunca el original) y devuelve
        la ruta relativa a UPLOAD_FOLDER, lista para persistir en la fila.
        """
        extension = ArchivosService.validar(archivo, categoria)
        carpeta = ArchivosService.carpeta_categoria(categoria)

        sufijo = f"{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}"
        nombre = f"{prefijo}{sufijo}{extension}"

        destino = os.path.join(current_app.config['UPLOAD_FOLDER'], carpeta)
        os.makedirs(destino, exist_ok=True)
        archivo.save(os.path.join(destino, nombre))

        ruta = f"{carpeta}/{nombre}"
        logger.info("Archivo guardado: %s (original: %s)", ruta, secure_filename(archivo.filename))
        return ruta

    @staticmethod
    def ruta_absoluta(ruta):
        raiz = os.path.abspath(current_app.config['UPLOAD_FOLDER'])
        absoluta = os.path.abspath(os.path.join(raiz, ruta))
        if os.path.commonpath([raiz, absoluta]) != raiz:
            raise ErrorValidacion('Ruta de archivo inválida')
        return absoluta

    @staticmethod
    def existe(ruta):
        return os.path.isfile(ArchivosService.ruta_absoluta(ruta))

    @staticmethod
    def eliminar(ruta):
        if not ruta:
            return False
        absoluta = ArchivosService.ruta_absoluta(ruta)
        if os.path.exists(absoluta):
            os.remove(absoluta)
            return True
        return False

    @staticmethod
    @contextmanager
    def operacion_con_adjunto(archivo, categoria, prefijo=''):
        """
        Unidad de trabajo archivo + base de datos.

        Escribe el adjunto (si hay) y entrega su ruta relativa. El bloque debe
        insertar y hacer commit. Ante cualquier excepción se hace rollback de la
        sesión y se borra el archivo recién escrito antes de relanzar.
        """
        ruta = ArchivosService.guardar(archivo, categoria, prefijo) if archivo else None
        try:
            yield ruta
        except Exception:
            db.session.rollback()
            if ruta:
                ArchivosService.eliminar(ruta)
                logger.warning("Adjunto %s eliminado tras fallo en el registro", ruta)
            raise
