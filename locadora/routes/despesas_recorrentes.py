"""
Rotas da API de Despesas Recorrentes (modelos que geram contas a pagar)
"""
from flask import Blueprint, jsonify, request

from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra, ler_bool, ler_payload_request
from locadora.services import despesa_recorrente_service

despesas_recorrentes_bp = Blueprint('despesas_recorrentes', __name__)


@despesas_recorrentes_bp.route('', methods=['GET'])
def listar_despesas():
    try:
        despesas = despesa_recorrente_service.listar(ativo=ler_bool('ativo'))
        return jsonify({
            'success': True,
            'data': [d.to_dict() for d in despesas],
            'total': len(despesas)
        }), 200
    except Exception as e:
        return erro_interno(e)


@despesas_recorrentes_bp.route('', methods=['POST'])
def criar_despesa():
    """
    Body (JSON):
        {
            "descricao": "Internet",
            "valor": 150.00,
            "dia_vencimento": 10,
            "categoria": "Despesa Recorrente",
            "forma_pagamento": "string" (opcional)
        }
    """
    try:
        despesa = despesa_recorrente_service.criar(ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'message': 'Despesa recorrente criada', 'data': despesa.to_dict()}), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@despesas_recorrentes_bp.route('/<int:despesa_id>', methods=['PUT'])
def atualizar_despesa(despesa_id):
    try:
        despesa = despesa_recorrente_service.atualizar(despesa_id, ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': despesa.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@despesas_recorrentes_bp.route('/<int:despesa_id>/ativar', methods=['POST'])
def ativar_despesa(despesa_id):
    try:
        despesa = despesa_recorrente_service.ativar(despesa_id)
        db.session.commit()
        return jsonify({'success': True, 'data': despesa.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@despesas_recorrentes_bp.route('/<int:despesa_id>/desativar', methods=['POST'])
def desativar_despesa(despesa_id):
    try:
        despesa = despesa_recorrente_service.desativar(despesa_id)
        db.session.commit()
        return jsonify({'success': True, 'data': despesa.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@despesas_recorrentes_bp.route('/<int:despesa_id>', methods=['DELETE'])
def excluir_despesa(despesa_id):
    try:
        despesa_recorrente_service.excluir(despesa_id)
        db.session.commit()
        return jsonify({'success': True, 'message': 'Despesa recorrente excluída'}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@despesas_recorrentes_bp.route('/gerar', methods=['POST'])
def gerar_contas_mes():
    """
    Gera as contas do mês para todas as despesas ativas

    Body (JSON):
        {"mes": "YYYY-MM"}
    """
    try:
        dados = ler_payload_request()
        mes = dados.get('mes') or request.args.get('mes')
        if not mes:
            return jsonify({'success': False, 'error': 'mes é obrigatório (YYYY-MM)'}), 400
        criadas = despesa_recorrente_service.gerar_para_mes(mes)
        db.session.commit()
        return jsonify({'success': True, 'data': {'mes': mes, 'contas_criadas': criadas}}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)
