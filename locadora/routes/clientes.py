from flask import Blueprint, jsonify

from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra, ler_bool, ler_payload_request
from locadora.services import cliente_service

clientes_bp = Blueprint('clientes', __name__)


@clientes_bp.route('', methods=['GET'])
def listar_clientes():
    try:
        clientes = cliente_service.listar_clientes(ativo=ler_bool('ativo'))
        return jsonify({'success': True, 'data': [c.to_dict() for c in clientes], 'total': len(clientes)}), 200
    except Exception as e:
        return erro_interno(e)


@clientes_bp.route('', methods=['POST'])
def criar_cliente():
    try:
        cliente = cliente_service.criar_cliente(ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': cliente.to_dict()}), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@clientes_bp.route('/<int:cliente_id>', methods=['PUT'])
def atualizar_cliente(cliente_id):
    try:
        cliente = cliente_service.atualizar_cliente(cliente_id, ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': cliente.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@clientes_bp.route('/<int:cliente_id>/historico', methods=['GET'])
def historico_cliente(cliente_id):
    """Contratos, custos e multas do cliente com totais"""
    try:
        return jsonify({'success': True, 'data': cliente_service.historico_cliente(cliente_id)}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)
