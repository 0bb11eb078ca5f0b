"""User-facing (pt-BR) messages returned by the API."""

from exceptions import TranscriptionErrorKind

NO_FILE = "Nenhum arquivo foi enviado. Selecione um arquivo de áudio."
UNSUPPORTED_FORMAT = (
    "Formato de arquivo não suportado. "
    "Use MP3, WAV, M4A, MP4, FLAC, OGG, WEBM ou OPUS."
)
EMPTY_FILE = "O arquivo enviado está vazio."
UPLOAD_FAILED = "Erro no upload do arquivo. Tente novamente."
NOT_FOUND = "Transcrição não encontrada."
FETCH_FAILED = "Erro ao buscar transcrição."
INTERNAL_ERROR = "Erro interno do servidor. Tente novamente mais tarde."
ALL_SEGMENTS_FAILED = (
    "Não foi possível transcrever nenhum segmento do arquivo. {detail}"
)
SEGMENTATION_FAILED = (
    "Não foi possível dividir o arquivo de áudio em partes. "
    "Verifique se o arquivo não está corrompido."
)
CONVERSION_FAILED = "Erro ao converter arquivo OPUS: {detail}"
SEGMENT_PLACEHOLDER = "[Erro na transcrição do segmento {number}: {detail}]"

M4A_BAD_REQUEST = (
    "Este arquivo M4A não é compatível com o serviço de transcrição. "
    "Tente converter o arquivo para MP3 ou WAV antes de fazer o upload."
)

_TRANSCRIPTION_MESSAGES = {
    TranscriptionErrorKind.INVALID_CREDENTIALS: (
        "Chave da API de transcrição inválida. Verifique a configuração."
    ),
    TranscriptionErrorKind.QUOTA_EXCEEDED: (
        "Cota da API de transcrição excedida. Tente novamente mais tarde."
    ),
    TranscriptionErrorKind.MODEL_UNAVAILABLE: (
        "Modelo de transcrição não disponível. Tente novamente mais tarde."
    ),
    TranscriptionErrorKind.PAYLOAD_TOO_LARGE: (
        "Arquivo muito grande para processamento. Reduza o tamanho do arquivo."
    ),
    TranscriptionErrorKind.BAD_REQUEST: (
        "Formato de arquivo não suportado ou arquivo corrompido."
    ),
    TranscriptionErrorKind.SERVER_ERROR: (
        "Erro temporário do serviço de transcrição. "
        "Tente novamente em alguns minutos."
    ),
    TranscriptionErrorKind.CONNECTION: (
        "Erro de conexão com o serviço de transcrição. "
        "Verifique sua conexão com a internet."
    ),
    TranscriptionErrorKind.EMPTY_RESULT: (
        "Não foi possível extrair texto do arquivo de áudio. "
        "Verifique se o arquivo contém fala audível."
    ),
    TranscriptionErrorKind.UNKNOWN: (
        "Erro ao processar o arquivo de áudio. "
        "Verifique se o arquivo não está corrompido e tente novamente."
    ),
}


def transcription_message(
    kind: TranscriptionErrorKind, file_name: str | None = None
) -> str:
    """Returns the message shown to the user for a provider failure."""
    if (
        kind is TranscriptionErrorKind.BAD_REQUEST
        and file_name
        and file_name.lower().endswith(".m4a")
    ):
        return M4A_BAD_REQUEST
    return _TRANSCRIPTION_MESSAGES[kind]


def upload_too_large(max_bytes: int) -> str:
    return f"Arquivo muito grande. O tamanho máximo é {max_bytes // (1024 * 1024)}MB."
