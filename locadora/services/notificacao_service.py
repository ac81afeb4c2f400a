"""
Notificações de dano por e-mail

Fila em notificacao_dano; cada execução tenta enviar uma vez cada item
pendente e marca 'enviada' ou 'falha'. Não há novas tentativas automáticas.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime

import requests
from flask import current_app, render_template

from locadora.models import db, NotificacaoDano

logger = logging.getLogger(__name__)

STATUS_PENDENTE = 'pendente'
STATUS_ENVIADA = 'enviada'
STATUS_FALHA = 'falha'

CORES_SEVERIDADE = {
    'Baixa': '#10b981',
    'Média': '#f59e0b',
    'Alta': '#ef4444',
}


def enfileirar_dano(dano, custo=None) -> NotificacaoDano:
    """Registra um dano de inspeção para envio posterior."""
    veiculo = dano.veiculo
    dados = {
        'dano_id': dano.id,
        'custo_id': custo.id if custo else None,
        'contrato_id': dano.contrato_id,
        'veiculo_placa': veiculo.placa if veiculo else None,
        'veiculo_modelo': veiculo.modelo if veiculo else None,
        'local': dano.local,
        'tipo_dano': dano.tipo_dano,
        'severidade': dano.severidade,
        'descricao': dano.descricao,
        'requer_reparo': bool(dano.requer_reparo),
        'registrado_em': (dano.criado_em or datetime.utcnow()).isoformat(),
    }
    notificacao = NotificacaoDano(
        dano_id=dano.id,
        custo_id=custo.id if custo else None,
        status=STATUS_PENDENTE,
        dados_json=json.dumps(dados, ensure_ascii=False)
    )
    db.session.add(notificacao)
    db.session.flush()
    return notificacao


def renderizar_email(dados: dict) -> str:
    registrado_em = dados.get('registrado_em')
    try:
        data_hora = datetime.fromisoformat(registrado_em).strftime('%d/%m/%Y %H:%M') if registrado_em else '-'
    except ValueError:
        data_hora = registrado_em
    return render_template(
        'emails/dano_detectado.html',
        dados=dados,
        cor_severidade=CORES_SEVERIDADE.get(dados.get('severidade'), '#6b7280'),
        data_hora=data_hora,
        app_url=current_app.config['APP_URL'].rstrip('/')
    )


def enviar_email(destinatarios, assunto, html):
    """
    Envia pela API HTTP configurada. Levanta exceção em qualquer falha.
    """
    config = current_app.config
    if not config.get('EMAIL_API_KEY'):
        raise RuntimeError('EMAIL_API_KEY não configurada')
    if not destinatarios:
        raise RuntimeError('Nenhum destinatário configurado (EMAIL_NOTIFICACAO_DANOS)')

    resposta = requests.post(
        config['EMAIL_API_URL'],
        headers={
            'Authorization': f"Bearer {config['EMAIL_API_KEY']}",
            'Content-Type': 'application/json',
        },
        json={
            'from': config['EMAIL_REMETENTE'],
            'to': list(destinatarios),
            'subject': assunto,
            'html': html,
        },
        timeout=config.get('EMAIL_TIMEOUT', 10)
    )
    resposta.raise_for_status()
    return resposta


def listar_pendentes() -> list[NotificacaoDano]:
    return NotificacaoDano.query.filter_by(status=STATUS_PENDENTE).order_by(NotificacaoDano.criado_em.asc()).all()


def processar_pendentes() -> list[dict]:
    """
    Envia todas as notificações pendentes

    Returns:
        list[dict]: {id, status ('enviada'|'falha'), veiculo, erro?} por item
    """
    destinatarios = current_app.config.get('EMAIL_NOTIFICACAO_DANOS') or []
    resultados = []

    for notificacao in listar_pendentes():
        dados = {}
        try:
            dados = json.loads(notificacao.dados_json)
            assunto = f"DANO DETECTADO - Veículo {dados.get('veiculo_placa') or '-'}"
            enviar_email(destinatarios, assunto, renderizar_email(dados))
        except (requests.RequestException, RuntimeError, ValueError) as e:
            notificacao.status = STATUS_FALHA
            notificacao.mensagem_erro = str(e)
            logger.error('Falha ao enviar notificação de dano %s: %s', notificacao.id, e)
            resultados.append({
                'id': notificacao.id,
                'status': STATUS_FALHA,
                'erro': str(e),
                'veiculo': dados.get('veiculo_placa')
            })
        else:
            notificacao.status = STATUS_ENVIADA
            notificacao.enviada_em = datetime.utcnow()
            notificacao.mensagem_erro = None
            resultados.append({
                'id': notificacao.id,
                'status': STATUS_ENVIADA,
                'veiculo': dados.get('veiculo_placa')
            })
        db.session.add(notificacao)

    db.session.flush()
    if resultados:
        logger.info('Notificações de dano processadas: %d', len(resultados))
    return resultados
