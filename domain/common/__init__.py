"""领域层公共组件"""
