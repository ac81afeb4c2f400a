"""
Rotas do painel financeiro
"""
from flask import Blueprint, jsonify, request

from locadora.categorias import CATEGORIAS_CONTA_PAGAR, CATEGORY_LABELS, ORIGIN_LABELS
from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra
from locadora.services import resumo_financeiro_service
from locadora.services.datas import parse_date

financeiro_bp = Blueprint('financeiro', __name__)


@financeiro_bp.route('/resumo', methods=['GET'])
def resumo():
    """
    Query params:
        hoje: YYYY-MM-DD (opcional, para simulação)
    """
    try:
        hoje = parse_date(request.args.get('hoje'))
        return jsonify({'success': True, 'data': resumo_financeiro_service.resumo_financeiro(hoje)}), 200
    except Exception as e:
        return erro_interno(e)


@financeiro_bp.route('/sincronizar-custos', methods=['POST'])
def sincronizar_custos():
    try:
        criadas = resumo_financeiro_service.sincronizar_custos_contas_pagar()
        db.session.commit()
        return jsonify({'success': True, 'data': {'contas_criadas': criadas}}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@financeiro_bp.route('/categorias', methods=['GET'])
def categorias():
    return jsonify({
        'success': True,
        'data': {
            'contas_pagar': list(CATEGORIAS_CONTA_PAGAR),
            'custos': CATEGORY_LABELS,
            'origens': ORIGIN_LABELS
        }
    }), 200
