"""
Rotas da API de Funcionários
"""
from flask import Blueprint, jsonify

from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra, ler_bool, ler_payload_request
from locadora.services import funcionario_service

funcionarios_bp = Blueprint('funcionarios', __name__)


@funcionarios_bp.route('', methods=['GET'])
def listar_funcionarios():
    try:
        funcionarios = funcionario_service.listar_funcionarios(ativo=ler_bool('ativo'))
        return jsonify({'success': True, 'data': [f.to_dict() for f in funcionarios], 'total': len(funcionarios)}), 200
    except Exception as e:
        return erro_interno(e)


@funcionarios_bp.route('', methods=['POST'])
def criar_funcionario():
    """
    Body (JSON):
        {"nome": str, "cargo": str, "codigo": str, "email": str,
         "salario_base": float, "dia_pagamento": int}
    """
    try:
        funcionario = funcionario_service.criar_funcionario(ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': funcionario.to_dict()}), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@funcionarios_bp.route('/<int:funcionario_id>', methods=['PUT'])
def atualizar_funcionario(funcionario_id):
    try:
        funcionario = funcionario_service.atualizar_funcionario(funcionario_id, ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': funcionario.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@funcionarios_bp.route('/<int:funcionario_id>/desativar', methods=['POST'])
def desativar_funcionario(funcionario_id):
    try:
        funcionario = funcionario_service.desativar_funcionario(funcionario_id)
        db.session.commit()
        return jsonify({'success': True, 'data': funcionario.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)
