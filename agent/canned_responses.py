"""
Offline answers used when every provider has failed.

Pure and content-addressed: the same prompt (any casing) always lands in
the same bucket and yields byte-identical text. Buckets are checked in
order and the first keyword hit wins. Keywords are Spanish stems so that
conjugations ("organizo", "organizar") share a bucket.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from services.stt.base import SUPPORTED_EXTENSIONS

MAX_RECOMMENDED_AUDIO_MB = 10


@dataclass(frozen=True)
class CannedBucket:
    name: str
    keywords: Tuple[str, ...]
    message: str


CANNED_BUCKETS: Tuple[CannedBucket, ...] = (
    CannedBucket(
        name="study",
        keywords=("tarea", "estudi"),
        message=(
            "Para ayudarte mejor con tus tareas, te recomiendo:\n\n"
            "1. Divide tu tarea en partes más pequeñas\n"
            "2. Establece horarios específicos para cada parte\n"
            "3. Toma descansos regulares de 10-15 minutos\n"
            "4. Usa técnicas de memorización como mapas mentales\n"
            "5. Revisa tus apuntes antes de empezar\n\n"
            "¿Hay algo específico con lo que necesites ayuda?"
        ),
    ),
    CannedBucket(
        name="exam",
        keywords=("examen", "prueba"),
        message=(
            "Para prepararte para un examen, te sugiero:\n\n"
            "1. Comienza a estudiar con al menos una semana de anticipación\n"
            "2. Revisa tus apuntes y material del curso\n"
            "3. Practica con ejercicios similares\n"
            "4. Forma grupos de estudio con compañeros\n"
            "5. Descansa bien la noche anterior\n"
            "6. Llega temprano el día del examen\n\n"
            "¡Mucho éxito en tu examen!"
        ),
    ),
    CannedBucket(
        name="organize",
        keywords=("organiz", "planific"),
        message=(
            "Para organizar mejor tu tiempo de estudio:\n\n"
            "1. Usa un calendario o agenda\n"
            "2. Prioriza las tareas según su importancia y fecha de entrega\n"
            "3. Establece metas diarias alcanzables\n"
            "4. Elimina distracciones durante el estudio\n"
            "5. Utiliza la técnica Pomodoro (25 minutos de estudio, 5 de descanso)\n\n"
            "¿Te gustaría ayuda con algo más específico?"
        ),
    ),
    CannedBucket(
        name="motivation",
        keywords=("motivaci", "motivad"),
        message=(
            "Mantener la motivación es clave para el éxito académico:\n\n"
            "1. Establece objetivos claros y realistas\n"
            "2. Celebra tus pequeños logros\n"
            "3. Recuerda tus metas a largo plazo\n"
            "4. Busca un lugar de estudio cómodo y tranquilo\n"
            "5. Recompénsate después de completar tareas difíciles\n\n"
            "¡Tú puedes lograrlo!"
        ),
    ),
)

GENERIC_FALLBACK = (
    "Gracias por tu pregunta. Actualmente estoy experimentando dificultades técnicas "
    "para conectarme con los servicios de IA.\n\n"
    "Sin embargo, estoy aquí para ayudarte con:\n"
    "- Organización de tareas y horarios de estudio\n"
    "- Recordatorios de eventos importantes\n"
    "- Consejos generales para mejorar tu rendimiento académico\n\n"
    "Por favor, intenta reformular tu pregunta o especifica en qué área necesitas ayuda."
)


def match_bucket(prompt: str) -> Optional[CannedBucket]:
    """First bucket with a keyword contained in the lower-cased prompt."""
    lowered = (prompt or "").lower()
    for bucket in CANNED_BUCKETS:
        if any(keyword in lowered for keyword in bucket.keywords):
            return bucket
    return None


def canned_answer(prompt: str) -> str:
    bucket = match_bucket(prompt)
    return bucket.message if bucket else GENERIC_FALLBACK


def canned_transcription(filename: str) -> str:
    formats = ", ".join(ext.lstrip(".").upper() for ext in sorted(SUPPORTED_EXTENSIONS))
    return (
        "[Transcripción simulada]\n\n"
        f"El archivo de audio '{filename}' fue recibido correctamente, pero actualmente "
        "los servicios de transcripción no están disponibles.\n\n"
        "Para habilitar la transcripción real:\n"
        "1. Configure una API Key válida de Hugging Face (HUGGINGFACE_API_KEY)\n"
        "2. O configure una API Key válida de Gemini AI (GEMINI_API_KEY)\n\n"
        f"Formatos soportados: {formats}\n"
        f"Tamaño máximo recomendado: {MAX_RECOMMENDED_AUDIO_MB}MB\n\n"
        "Una vez configurado, podrá transcribir audio en tiempo real."
    )
