"""
Rotas da API de Salários
"""
from flask import Blueprint, jsonify, request

from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra, ler_payload_request
from locadora.services.salario_service import SalarioService

salarios_bp = Blueprint('salarios', __name__)


@salarios_bp.route('', methods=['GET'])
def listar_salarios():
    """
    Query params:
        mes: YYYY-MM
        funcionario_id, status
    """
    try:
        salarios = SalarioService.listar_salarios(
            mes=request.args.get('mes'),
            funcionario_id=request.args.get('funcionario_id', type=int),
            status=request.args.get('status')
        )
        return jsonify({
            'success': True,
            'data': [s.to_dict() for s in salarios],
            'total': len(salarios)
        }), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@salarios_bp.route('', methods=['POST'])
def criar_salario():
    """
    Body (JSON):
        {
            "funcionario_id": int,
            "valor": float,
            "data_pagamento": "YYYY-MM-DD",
            "mes_referencia": "YYYY-MM" (opcional)
        }
    """
    try:
        salario = SalarioService.criar_salario(ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'message': 'Salário lançado', 'data': salario.to_dict()}), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@salarios_bp.route('/<int:salario_id>', methods=['PUT'])
def atualizar_salario(salario_id):
    try:
        salario = SalarioService.atualizar_salario(salario_id, ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': salario.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@salarios_bp.route('/<int:salario_id>', methods=['DELETE'])
def excluir_salario(salario_id):
    try:
        SalarioService.excluir_salario(salario_id)
        db.session.commit()
        return jsonify({'success': True, 'message': 'Salário excluído'}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@salarios_bp.route('/gerar', methods=['POST'])
def gerar_salarios():
    try:
        dados = ler_payload_request()
        mes = dados.get('mes') or request.args.get('mes')
        if not mes:
            return jsonify({'success': False, 'error': 'mes é obrigatório (YYYY-MM)'}), 400
        criados = SalarioService.gerar_salarios_mes(mes)
        db.session.commit()
        return jsonify({'success': True, 'data': {'mes': mes, 'salarios_criados': criados}}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)
