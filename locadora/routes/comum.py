"""
Utilitários compartilhados pelas rotas
"""
import logging

from flask import jsonify, request

from locadora.models import db

logger = logging.getLogger(__name__)


def ler_payload_request():
    dados = request.get_json(silent=True)
    if not dados:
        dados = request.form.to_dict()
    return dados or {}


def ler_bool(nome):
    valor = request.args.get(nome)
    if valor is None or valor == '':
        return None
    return valor.lower() in ('true', '1', 'sim')


def erro_regra(e):
    """ValueError de serviço: 404 para registro inexistente, 400 para o resto."""
    db.session.rollback()
    status = 404 if 'não encontrad' in str(e) else 400
    return jsonify({'success': False, 'error': str(e)}), status


def erro_interno(e):
    logger.exception('Erro não tratado em %s %s', request.method, request.path)
    db.session.rollback()
    return jsonify({'success': False, 'error': str(e)}), 500
