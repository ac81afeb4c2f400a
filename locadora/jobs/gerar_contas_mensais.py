"""
Job Mensal: Gerar contas a pagar das despesas recorrentes e salários do mês

Executado pelo scheduler no 1º dia de cada mês às 00:05. Idempotente:
pode ser rodado de novo no mesmo mês sem duplicar contas.

Executar manualmente: python -m locadora.jobs.gerar_contas_mensais [YYYY-MM]
"""
import logging
import sys
from datetime import date

from locadora.models import db
from locadora.services import despesa_recorrente_service
from locadora.services.salario_service import SalarioService

logger = logging.getLogger(__name__)


def gerar_contas_mensais(mes=None):
    """
    Deve ser chamado dentro de um app context.

    Returns:
        dict: {'mes', 'contas_criadas', 'salarios_criados'}
    """
    mes = mes or date.today().replace(day=1)
    try:
        contas = despesa_recorrente_service.gerar_para_mes(mes)
        salarios = SalarioService.gerar_salarios_mes(mes)
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Erro ao gerar contas do mês %s', mes)
        raise

    logger.info('Job mensal concluído: %d conta(s), %d salário(s)', contas, salarios)
    return {'mes': str(mes), 'contas_criadas': contas, 'salarios_criados': salarios}


if __name__ == '__main__':
    from locadora.app import create_app

    app = create_app()
    with app.app_context():
        try:
            resultado = gerar_contas_mensais(sys.argv[1] if len(sys.argv) > 1 else None)
        except Exception:
            sys.exit(1)
        print(f"OK - {resultado['contas_criadas']} conta(s) e {resultado['salarios_criados']} salário(s) gerados")
