"""
Agendador de Jobs Automáticos

Executa tarefas periódicas do sistema:
- Contas a pagar recorrentes e salários do mês (dia 1, 00:05)
- Envio das notificações de dano pendentes (a cada 15 minutos)

Iniciado por create_app quando SCHEDULER_ENABLED=true.
"""
import atexit
import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler()


def _no_contexto(app, func):
    def executar():
        with app.app_context():
            try:
                func()
            except Exception:
                logger.exception('Job %s falhou', func.__name__)
    executar.__name__ = func.__name__
    return executar


def registrar_jobs(app):
    from locadora.jobs.enviar_notificacoes_danos import enviar_notificacoes_danos
    from locadora.jobs.gerar_contas_mensais import gerar_contas_mensais

    scheduler.add_job(
        func=_no_contexto(app, gerar_contas_mensais),
        trigger=CronTrigger(day=1, hour=0, minute=5),  # Dia 1, 00:05
        id='gerar_contas_mensais',
        name='Gerar contas recorrentes e salários do mês',
        replace_existing=True
    )
    scheduler.add_job(
        func=_no_contexto(app, enviar_notificacoes_danos),
        trigger=CronTrigger(minute='*/15'),
        id='enviar_notificacoes_danos',
        name='Enviar notificações de dano',
        replace_existing=True
    )


def start_scheduler(app):
    if scheduler.running:
        return
    registrar_jobs(app)
    scheduler.start()
    atexit.register(lambda: scheduler.shutdown(wait=False))
    logger.info('Scheduler de jobs iniciado: %s', ', '.join(j.id for j in scheduler.get_jobs()))
