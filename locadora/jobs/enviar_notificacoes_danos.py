"""
Job: enviar notificações de dano pendentes por e-mail

Executado pelo scheduler a cada 15 minutos.

Executar manualmente: python -m locadora.jobs.enviar_notificacoes_danos
"""
import logging
import sys

from locadora.models import db
from locadora.services import notificacao_service

logger = logging.getLogger(__name__)


def enviar_notificacoes_danos():
    """Deve ser chamado dentro de um app context."""
    try:
        resultados = notificacao_service.processar_pendentes()
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Erro ao processar notificações de dano')
        raise
    return resultados


if __name__ == '__main__':
    from locadora.app import create_app

    app = create_app()
    with app.app_context():
        try:
            resultados = enviar_notificacoes_danos()
        except Exception:
            sys.exit(1)
        falhas = len([r for r in resultados if r['status'] == notificacao_service.STATUS_FALHA])
        print(f'OK - {len(resultados)} notificação(ões) processada(s), {falhas} falha(s)')
