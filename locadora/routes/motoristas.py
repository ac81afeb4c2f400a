"""
Rotas da API de Motoristas e atribuição de veículos
"""
from flask import Blueprint, jsonify

from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra, ler_bool, ler_payload_request
from locadora.services import motorista_service

motoristas_bp = Blueprint('motoristas', __name__)


@motoristas_bp.route('', methods=['GET'])
def listar_motoristas():
    try:
        motoristas = motorista_service.listar_motoristas(ativo=ler_bool('ativo'))
        return jsonify({'success': True, 'data': [m.to_dict() for m in motoristas], 'total': len(motoristas)}), 200
    except Exception as e:
        return erro_interno(e)


@motoristas_bp.route('', methods=['POST'])
def criar_motorista():
    try:
        motorista = motorista_service.criar_motorista(ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': motorista.to_dict()}), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@motoristas_bp.route('/<int:motorista_id>', methods=['PUT'])
def atualizar_motorista(motorista_id):
    try:
        motorista = motorista_service.atualizar_motorista(motorista_id, ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': motorista.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@motoristas_bp.route('/<int:motorista_id>', methods=['DELETE'])
def excluir_motorista(motorista_id):
    try:
        motorista_service.excluir_motorista(motorista_id)
        db.session.commit()
        return jsonify({'success': True, 'message': 'Motorista excluído'}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@motoristas_bp.route('/<int:motorista_id>/veiculos', methods=['GET'])
def veiculos_do_motorista(motorista_id):
    try:
        atribuicoes = motorista_service.veiculos_do_motorista(motorista_id)
        return jsonify({'success': True, 'data': [a.to_dict() for a in atribuicoes]}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@motoristas_bp.route('/<int:motorista_id>/veiculos', methods=['POST'])
def atribuir_veiculo(motorista_id):
    """
    Body (JSON):
        {"veiculo_id": int, "contrato_id": int (opcional)}
    """
    try:
        dados = ler_payload_request()
        atribuicao = motorista_service.atribuir_veiculo(
            motorista_id, dados.get('veiculo_id'), contrato_id=dados.get('contrato_id')
        )
        db.session.commit()
        return jsonify({'success': True, 'data': atribuicao.to_dict()}), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@motoristas_bp.route('/atribuicoes/<int:atribuicao_id>', methods=['DELETE'])
def remover_atribuicao(atribuicao_id):
    try:
        atribuicao = motorista_service.remover_atribuicao(atribuicao_id)
        db.session.commit()
        return jsonify({'success': True, 'data': atribuicao.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)
