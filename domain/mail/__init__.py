"""邮件领域模块

该模块包含与远端邮箱存储同步的邮件模型，包括：
- Message 实体及其加载状态机
- EmailAddress 值对象与地址格式化
- 邮件路径构造
- MailResource 远端存储接口
- 领域事件与异常
"""
